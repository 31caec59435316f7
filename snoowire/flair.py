"""Flair: tags attached to users and posts, their templates and settings."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Any, Iterable

from snoowire.client import Client, Response

USER_FLAIR = "USER_FLAIR"
LINK_FLAIR = "LINK_FLAIR"


def _bool_value(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class Flair:
    """A tag that can be attached to a user or a post."""

    id: str = ""
    type: str = ""
    text: str = ""
    color: str = ""
    background_color: str = ""
    css_class: str = ""
    editable: bool = False
    mod_only: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Flair":
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            text=data.get("text") or "",
            color=data.get("text_color") or "",
            background_color=data.get("background_color") or "",
            css_class=data.get("css_class") or "",
            editable=bool(data.get("text_editable")),
            mod_only=bool(data.get("mod_only")),
        )


@dataclass
class FlairSummary:
    """A condensed view of a user's flair."""

    user: str = ""
    text: str = ""
    css_class: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FlairSummary":
        return cls(
            user=data.get("user") or "",
            text=data.get("flair_text") or "",
            css_class=data.get("flair_css_class") or "",
        )


@dataclass
class FlairChoice:
    """A flair that can be selected for yourself or for a post."""

    template_id: str = ""
    text: str = ""
    editable: bool = False
    position: str = ""
    css_class: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FlairChoice":
        return cls(
            template_id=data.get("flair_template_id") or "",
            text=data.get("flair_text") or "",
            editable=bool(data.get("flair_text_editable")),
            position=data.get("flair_position") or "",
            css_class=data.get("flair_css_class") or "",
        )


@dataclass
class FlairConfigureRequest:
    """A request to configure a subreddit's flair settings.

    Leaving a setting unset can have unexpected side effects, so set every one.
    """

    user_flair_enabled: bool | None = None
    user_flair_position: str = ""
    user_flair_self_assign_enabled: bool | None = None
    post_flair_position: str = ""
    post_flair_self_assign_enabled: bool | None = None

    def to_form(self) -> dict[str, str]:
        form: dict[str, str] = {}
        if self.user_flair_enabled is not None:
            form["flair_enabled"] = _bool_value(self.user_flair_enabled)
        if self.user_flair_position:
            form["flair_position"] = self.user_flair_position
        if self.user_flair_self_assign_enabled is not None:
            form["flair_self_assign_enabled"] = _bool_value(self.user_flair_self_assign_enabled)
        if self.post_flair_position:
            form["link_flair_position"] = self.post_flair_position
        if self.post_flair_self_assign_enabled is not None:
            form["link_flair_self_assign_enabled"] = _bool_value(
                self.post_flair_self_assign_enabled
            )
        return form


@dataclass
class FlairTemplateCreateOrUpdateRequest:
    """A request to create a flair template, or update it when ``id`` is valid."""

    id: str = ""
    allowable_content: str = ""
    text: str = ""
    text_color: str = ""
    text_editable: bool | None = None
    mod_only: bool | None = None
    max_emojis: int | None = None
    background_color: str = ""
    css_class: str = ""

    def to_form(self) -> dict[str, str]:
        form: dict[str, str] = {}
        for key, value in (
            ("flair_template_id", self.id),
            ("allowable_content", self.allowable_content),
            ("text", self.text),
            ("text_color", self.text_color),
        ):
            if value:
                form[key] = value
        if self.text_editable is not None:
            form["text_editable"] = _bool_value(self.text_editable)
        if self.mod_only is not None:
            form["mod_only"] = _bool_value(self.mod_only)
        if self.max_emojis is not None:
            form["max_emojis"] = str(self.max_emojis)
        if self.background_color:
            form["background_color"] = self.background_color
        if self.css_class:
            form["css_class"] = self.css_class
        return form


@dataclass
class FlairTemplate:
    """A flair template usable next to usernames or posts in a subreddit."""

    id: str = ""
    type: str = ""
    mod_only: bool = False
    allowable_content: str = ""
    text: str = ""
    text_type: str = ""
    text_color: str = ""
    text_editable: bool = False
    rich_text: list[dict[str, str]] = field(default_factory=list)
    override_css: bool = False
    max_emojis: int = 0
    background_color: str = ""
    css_class: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FlairTemplate":
        return cls(
            id=data.get("id") or "",
            type=data.get("flairType") or "",
            mod_only=bool(data.get("modOnly")),
            allowable_content=data.get("allowableContent") or "",
            text=data.get("text") or "",
            text_type=data.get("type") or "",
            text_color=data.get("textColor") or "",
            text_editable=bool(data.get("textEditable")),
            rich_text=[dict(item) for item in data.get("richtext") or []],
            override_css=bool(data.get("overrideCss")),
            max_emojis=int(data.get("maxEmojis") or 0),
            background_color=data.get("backgroundColor") or "",
            css_class=data.get("cssClass") or "",
        )


@dataclass
class FlairSelectRequest:
    """A request to select a flair template, optionally with custom text."""

    id: str = ""
    text: str = ""

    def to_form(self) -> dict[str, str]:
        form: dict[str, str] = {}
        if self.id:
            form["flair_template_id"] = self.id
        if self.text:
            form["text"] = self.text
        return form


@dataclass
class FlairChangeRequest:
    """A change of a user's flair; empty text and class clear it."""

    user: str
    text: str = ""
    css_class: str = ""


@dataclass
class FlairChangeResponse:
    """The outcome of one FlairChangeRequest."""

    ok: bool = False
    status: str = ""
    warnings: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FlairChangeResponse":
        return cls(
            ok=bool(data.get("ok")),
            status=data.get("status") or "",
            warnings=dict(data.get("warnings") or {}),
            errors=dict(data.get("errors") or {}),
        )


def _require(request: Any, name: str) -> None:
    if request is None:
        raise ValueError(f"{name}: cannot be None")


class FlairService:
    """Flair related endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _post(self, path: str, form: dict[str, str]) -> Response:
        _, response = self._client.request("POST", path, form=form)
        return response

    def _flairs(self, path: str) -> tuple[list[Flair], Response]:
        data, response = self._client.request("GET", path)
        return [Flair.from_json(item) for item in data or []], response

    def get_user_flairs(self, subreddit: str) -> tuple[list[Flair], Response]:
        """Return the user flairs of the subreddit."""
        return self._flairs(f"r/{subreddit}/api/user_flair_v2")

    def get_post_flairs(self, subreddit: str) -> tuple[list[Flair], Response]:
        """Return the post flairs of the subreddit."""
        return self._flairs(f"r/{subreddit}/api/link_flair_v2")

    def list_user_flairs(self, subreddit: str) -> tuple[list[FlairSummary], Response]:
        """Return the flairs of individual users in the subreddit."""
        data, response = self._client.request("GET", f"r/{subreddit}/api/flairlist")
        users = (data or {}).get("users") or []
        return [FlairSummary.from_json(item) for item in users], response

    def configure(self, subreddit: str, request: FlairConfigureRequest | None) -> Response:
        """Configure the subreddit's flair settings."""
        _require(request, "FlairConfigureRequest")
        form = request.to_form()
        form["api_type"] = "json"
        return self._post(f"r/{subreddit}/api/flairconfig", form)

    def _set_enabled(self, subreddit: str, enabled: bool) -> Response:
        return self._post(
            f"r/{subreddit}/api/setflairenabled",
            {"api_type": "json", "flair_enabled": _bool_value(enabled)},
        )

    def enable(self, subreddit: str) -> Response:
        """Enable your flair in the subreddit."""
        return self._set_enabled(subreddit, True)

    def disable(self, subreddit: str) -> Response:
        """Disable your flair in the subreddit."""
        return self._set_enabled(subreddit, False)

    def _upsert(
        self, subreddit: str, request: FlairTemplateCreateOrUpdateRequest | None, flair_type: str
    ) -> tuple[FlairTemplate, Response]:
        _require(request, "FlairTemplateCreateOrUpdateRequest")
        form = request.to_form()
        form["api_type"] = "json"
        form["flair_type"] = flair_type
        data, response = self._client.request(
            "POST", f"r/{subreddit}/api/flairtemplate_v2", form=form
        )
        return FlairTemplate.from_json(data or {}), response

    def upsert_user_template(
        self, subreddit: str, request: FlairTemplateCreateOrUpdateRequest | None
    ) -> tuple[FlairTemplate, Response]:
        """Create or update a user flair template and return it."""
        return self._upsert(subreddit, request, USER_FLAIR)

    def upsert_post_template(
        self, subreddit: str, request: FlairTemplateCreateOrUpdateRequest | None
    ) -> tuple[FlairTemplate, Response]:
        """Create or update a post flair template and return it."""
        return self._upsert(subreddit, request, LINK_FLAIR)

    def delete(self, subreddit: str, username: str) -> Response:
        """Delete the flair of the user."""
        return self._post(
            f"r/{subreddit}/api/deleteflair", {"api_type": "json", "name": username}
        )

    def delete_template(self, subreddit: str, id: str) -> Response:
        """Delete a flair template by its ID."""
        return self._post(
            f"r/{subreddit}/api/deleteflairtemplate",
            {"api_type": "json", "flair_template_id": id},
        )

    def _clear_templates(self, subreddit: str, flair_type: str) -> Response:
        return self._post(
            f"r/{subreddit}/api/clearflairtemplates",
            {"api_type": "json", "flair_type": flair_type},
        )

    def delete_all_user_templates(self, subreddit: str) -> Response:
        """Delete all user flair templates."""
        return self._clear_templates(subreddit, USER_FLAIR)

    def delete_all_post_templates(self, subreddit: str) -> Response:
        """Delete all post flair templates."""
        return self._clear_templates(subreddit, LINK_FLAIR)

    def _reorder(self, subreddit: str, flair_type: str, ids: Iterable[str]) -> Response:
        _, response = self._client.request(
            "PATCH",
            f"api/v1/{subreddit}/flair_template_order/{flair_type}",
            json_body=list(ids),
        )
        return response

    def reorder_user_templates(self, subreddit: str, ids: Iterable[str]) -> Response:
        """Reorder user flair templates; every template ID must be given."""
        return self._reorder(subreddit, USER_FLAIR, ids)

    def reorder_post_templates(self, subreddit: str, ids: Iterable[str]) -> Response:
        """Reorder post flair templates; every template ID must be given."""
        return self._reorder(subreddit, LINK_FLAIR, ids)

    def _choices(
        self, path: str, form: dict[str, str]
    ) -> tuple[list[FlairChoice], FlairChoice | None, Response]:
        data, response = self._client.request("POST", path, form=form)
        data = data or {}
        choices = [FlairChoice.from_json(item) for item in data.get("choices") or []]
        current = data.get("current")
        return choices, (FlairChoice.from_json(current) if current else None), response

    def choices(
        self, subreddit: str
    ) -> tuple[list[FlairChoice], FlairChoice | None, Response]:
        """Return the flairs you can assign to yourself, and your current one."""
        return self.choices_of(subreddit, self._client.username)

    def choices_of(
        self, subreddit: str, username: str
    ) -> tuple[list[FlairChoice], FlairChoice | None, Response]:
        """Return the flairs the user can assign to themself, and their current one."""
        return self._choices(f"r/{subreddit}/api/flairselector", {"name": username})

    def choices_for_post(
        self, post_id: str
    ) -> tuple[list[FlairChoice], FlairChoice | None, Response]:
        """Return the flairs assignable to an existing post, and its current one."""
        return self._choices("api/flairselector", {"link": post_id})

    def choices_for_new_post(self, subreddit: str) -> tuple[list[FlairChoice], Response]:
        """Return the flairs assignable to a new post in the subreddit."""
        choices, _, response = self._choices(
            f"r/{subreddit}/api/flairselector", {"is_newlink": "true"}
        )
        return choices, response

    def select(self, subreddit: str, request: FlairSelectRequest | None) -> Response:
        """Select a flair to display next to your username in the subreddit."""
        return self.assign(subreddit, self._client.username, request)

    def assign(
        self, subreddit: str, user: str, request: FlairSelectRequest | None
    ) -> Response:
        """Assign a flair to a user in the subreddit."""
        _require(request, "FlairSelectRequest")
        form = request.to_form()
        form["api_type"] = "json"
        form["name"] = user
        return self._post(f"r/{subreddit}/api/selectflair", form)

    def select_for_post(self, post_id: str, request: FlairSelectRequest | None) -> Response:
        """Assign a flair to the post."""
        _require(request, "FlairSelectRequest")
        form = request.to_form()
        form["api_type"] = "json"
        form["link"] = post_id
        return self._post("api/selectflair", form)

    def remove_from_post(self, post_id: str) -> Response:
        """Remove the flair from the post."""
        return self._post("api/selectflair", {"api_type": "json", "link": post_id})

    def change(
        self, subreddit: str, requests: Iterable[FlairChangeRequest] | None
    ) -> tuple[list[FlairChangeResponse], Response]:
        """Change the flair of between 1 and 100 users at once."""
        changes = list(requests or [])
        if not 1 <= len(changes) <= 100:
            raise ValueError("requests: must provide between 1 and 100")

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerows([change.user, change.text, change.css_class] for change in changes)

        data, response = self._client.request(
            "POST", f"r/{subreddit}/api/flaircsv", form={"flair_csv": buffer.getvalue()}
        )
        return [FlairChangeResponse.from_json(item) for item in data or []], response
"""Live threads: real-time update threads, their updates and contributors."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from snoowire.client import KIND_POST, Client, ListOptions, Response, parse_timestamp

KIND_LIVE_THREAD = "LiveUpdateEvent"
KIND_LIVE_THREAD_UPDATE = "LiveUpdate"

REPORT_REASONS = frozenset(
    {"spam", "vote-manipulation", "personal-information", "sexualizing-minors", "site-breaking"}
)


@dataclass
class LiveThread:
    """A thread that provides real-time updates."""

    id: str = ""
    full_id: str = ""
    created: datetime | None = None
    title: str = ""
    description: str = ""
    resources: str = ""
    state: str = ""
    viewer_count: int = 0
    viewer_count_fuzzed: bool = False
    # Empty once the thread has ended.
    websocket_url: str = ""
    announcement: bool = False
    nsfw: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "LiveThread":
        return cls(
            id=data.get("id") or "",
            full_id=data.get("name") or "",
            created=parse_timestamp(data.get("created_utc")),
            title=data.get("title") or "",
            description=data.get("description") or "",
            resources=data.get("resources") or "",
            state=data.get("state") or "",
            viewer_count=int(data.get("viewer_count") or 0),
            viewer_count_fuzzed=bool(data.get("viewer_count_fuzzed")),
            websocket_url=data.get("websocket_url") or "",
            announcement=bool(data.get("is_announcement")),
            nsfw=bool(data.get("nsfw")),
        )


@dataclass
class LiveThreadUpdate:
    """An update posted in a live thread."""

    id: str = ""
    full_id: str = ""
    author: str = ""
    created: datetime | None = None
    body: str = ""
    embedded_urls: list[str] = field(default_factory=list)
    stricken: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "LiveThreadUpdate":
        return cls(
            id=data.get("id") or "",
            full_id=data.get("name") or "",
            author=data.get("author") or "",
            created=parse_timestamp(data.get("created_utc")),
            body=data.get("body") or "",
            embedded_urls=[embed.get("url") or "" for embed in data.get("embeds") or []],
            stricken=bool(data.get("stricken")),
        )


@dataclass
class LiveThreadCreateOrUpdateRequest:
    """A request to create or configure a live thread. Titles are at most 120 characters."""

    title: str = ""
    description: str = ""
    resources: str = ""
    nsfw: bool | None = None

    def to_form(self) -> dict[str, str]:
        form: dict[str, str] = {}
        for key, value in (
            ("title", self.title),
            ("description", self.description),
            ("resources", self.resources),
        ):
            if value:
                form[key] = value
        if self.nsfw is not None:
            form["nsfw"] = "true" if self.nsfw else "false"
        return form


@dataclass
class LiveThreadContributor:
    """A user that can contribute to a live thread."""

    id: str = ""
    name: str = ""
    permissions: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "LiveThreadContributor":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            permissions=list(data.get("permissions") or []),
        )


def _children(root: Any) -> list[LiveThreadContributor]:
    if not isinstance(root, dict):
        return []
    children = (root.get("data") or {}).get("children") or []
    return [LiveThreadContributor.from_json(child) for child in children]


@dataclass
class LiveThreadContributors:
    """Current contributors, and invited ones when you may manage contributors."""

    current: list[LiveThreadContributor] = field(default_factory=list)
    invited: list[LiveThreadContributor] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "LiveThreadContributors":
        """Decode either a single user list or a pair of current and invited lists."""
        if isinstance(data, dict):
            return cls(current=_children(data))
        if isinstance(data, list):
            lists = list(data[:2]) + [None] * (2 - len(data[:2]))
            return cls(current=_children(lists[0]), invited=_children(lists[1]))
        raise ValueError(f"cannot decode contributors from {type(data).__name__}")


@dataclass
class LiveThreadPermissions:
    """Permissions a contributor has, or lacks, in a live thread."""

    all: bool = False
    close: bool = False
    discussions: bool = False
    edit: bool = False
    manage: bool = False
    settings: bool = False
    # Posting updates to the thread.
    update: bool = False

    def __str__(self) -> str:
        return ",".join(
            ("+" if getattr(self, f.name) else "-") + f.name for f in fields(self)
        )


def format_permissions(permissions: LiveThreadPermissions | None) -> str:
    """The API form of the permissions; None grants all of them."""
    return "+all" if permissions is None else str(permissions)


def _require(request: Any, name: str) -> None:
    if request is None:
        raise ValueError(f"{name}: cannot be None")


class LiveThreadService:
    """Live thread related endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _post(self, path: str, form: dict[str, str] | None = None) -> Response:
        payload = {"api_type": "json"}
        payload.update(form or {})
        _, response = self._client.request("POST", path, form=payload)
        return response

    def _thread(self, path: str) -> tuple[LiveThread | None, Response]:
        thing, response = self._client.get_thing(path)
        if not thing:
            return None, response
        return LiveThread.from_json(thing.get("data") or {}), response

    def now(self) -> tuple[LiveThread | None, Response]:
        """Return the currently featured live thread, or None if there is none."""
        return self._thread("api/live/happening_now")

    def get(self, id: str) -> tuple[LiveThread | None, Response]:
        """Return information about a live thread."""
        return self._thread(f"live/{id}/about")

    def get_multiple(self, *args: str) -> tuple[list[LiveThread], Response]:
        """Return information about several live threads."""
        if not args:
            raise ValueError("must provide at least 1 id")
        children, response = self._client.get_listing(f"api/live/by_id/{','.join(args)}")
        threads = [
            LiveThread.from_json(child.get("data") or {})
            for child in children
            if child.get("kind") == KIND_LIVE_THREAD
        ]
        return threads, response

    def update(self, id: str, text: str) -> Response:
        """Post an update to the live thread. Requires the "update" permission."""
        return self._post(f"api/live/{id}/update", {"body": text})

    def _updates(self, path: str, opts: ListOptions | None) -> tuple[list[LiveThreadUpdate], Response]:
        children, response = self._client.get_listing(path, opts)
        updates = [
            LiveThreadUpdate.from_json(child.get("data") or {})
            for child in children
            if child.get("kind") == KIND_LIVE_THREAD_UPDATE
        ]
        return updates, response

    def updates(self, id: str, opts: ListOptions | None = None) -> tuple[list[LiveThreadUpdate], Response]:
        """Return the updates posted in the live thread."""
        return self._updates(f"live/{id}", opts)

    def update_by_id(self, thread_id: str, update_id: str) -> tuple[LiveThreadUpdate | None, Response]:
        """Return one update by its short ID (without the "LiveUpdate_" prefix)."""
        updates, response = self._updates(f"live/{thread_id}/updates/{update_id}", None)
        return (updates[0] if updates else None), response

    def discussions(self, id: str, opts: ListOptions | None = None) -> tuple[list[dict], Response]:
        """Return the posts discussing the live thread."""
        children, response = self._client.get_listing(f"live/{id}/discussions", opts)
        return [child.get("data") for child in children if child.get("kind") == KIND_POST], response

    def strike(self, thread_id: str, update_id: str) -> Response:
        """Mark an update as incorrect and cross it out."""
        return self._post(f"api/live/{thread_id}/strike_update", {"id": update_id})

    def delete(self, thread_id: str, update_id: str) -> Response:
        """Delete an update from the live thread."""
        return self._post(f"api/live/{thread_id}/delete_update", {"id": update_id})

    def create(self, request: LiveThreadCreateOrUpdateRequest | None) -> tuple[str, Response]:
        """Create a live thread and return its ID."""
        _require(request, "LiveThreadCreateOrUpdateRequest")
        form = request.to_form()
        form["api_type"] = "json"
        data, response = self._client.request("POST", "api/live/create", form=form)
        thread_id = (((data or {}).get("json") or {}).get("data") or {}).get("id") or ""
        return thread_id, response

    def close(self, id: str) -> Response:
        """Close the thread permanently, disallowing future updates."""
        return self._post(f"api/live/{id}/close_thread")

    def configure(self, id: str, request: LiveThreadCreateOrUpdateRequest | None) -> Response:
        """Configure the thread. Requires the "settings" permission."""
        _require(request, "LiveThreadCreateOrUpdateRequest")
        return self._post(f"api/live/{id}/edit", request.to_form())

    def contributors(self, id: str) -> tuple[LiveThreadContributors, Response]:
        """Return the contributors of the live thread, and invited ones if visible."""
        data, response = self._client.request("GET", f"live/{id}/contributors")
        return LiveThreadContributors.from_json(data if data is not None else {}), response

    def accept(self, id: str) -> Response:
        """Accept a pending invite to contribute to the live thread."""
        return self._post(f"api/live/{id}/accept_contributor_invite")

    def leave(self, id: str) -> Response:
        """Give up your status as contributor of the live thread."""
        return self._post(f"api/live/{id}/leave_contributor")

    def _contributor_request(
        self, endpoint: str, id: str, username: str, kind: str, permissions: LiveThreadPermissions | None
    ) -> Response:
        return self._post(
            f"api/live/{id}/{endpoint}",
            {"name": username, "type": kind, "permissions": format_permissions(permissions)},
        )

    def invite(self, id: str, username: str, permissions: LiveThreadPermissions | None = None) -> Response:
        """Invite a user to contribute; None grants all permissions."""
        return self._contributor_request(
            "invite_contributor", id, username, "liveupdate_contributor_invite", permissions
        )

    def uninvite(self, thread_id: str, user_id: str) -> Response:
        """Withdraw an invite, by the user's full ID."""
        return self._post(f"api/live/{thread_id}/rm_contributor_invite", {"id": user_id})

    def set_permissions(
        self, id: str, username: str, permissions: LiveThreadPermissions | None = None
    ) -> Response:
        """Set a contributor's permissions; None grants all of them."""
        return self._contributor_request(
            "set_contributor_permissions", id, username, "liveupdate_contributor", permissions
        )

    def set_permissions_for_invite(
        self, id: str, username: str, permissions: LiveThreadPermissions | None = None
    ) -> Response:
        """Set the permissions of a pending invite; None grants all of them."""
        return self._contributor_request(
            "set_contributor_permissions", id, username, "liveupdate_contributor_invite", permissions
        )

    def revoke(self, thread_id: str, user_id: str) -> Response:
        """Revoke a user's contributorship, by the user's full ID."""
        return self._post(f"api/live/{thread_id}/rm_contributor", {"id": user_id})

    def hide_discussion(self, thread_id: str, post_id: str) -> Response:
        """Hide a linked post (base36 ID) from the discussion sidebar."""
        return self._post(f"api/live/{thread_id}/hide_discussion", {"link": post_id})

    def unhide_discussion(self, thread_id: str, post_id: str) -> Response:
        """Unhide a linked post (base36 ID) in the discussion sidebar."""
        return self._post(f"api/live/{thread_id}/unhide_discussion", {"link": post_id})

    def report(self, id: str, reason: str) -> Response:
        """Report the live thread for one of the accepted reasons."""
        if reason not in REPORT_REASONS:
            raise ValueError("invalid reason for reporting live thread: " + reason)
        return self._post(f"api/live/{id}/report", {"type": reason})
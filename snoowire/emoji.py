"""Emojis: graphic elements usable in post and user flair."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import requests

from snoowire.client import KIND_SUBREDDIT, Client, Response, check_response


def _bool_value(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class Emoji:
    """A graphic element that can be included in a post flair or user flair."""

    name: str = ""
    url: str = ""
    user_flair_allowed: bool = False
    post_flair_allowed: bool = False
    mod_flair_only: bool = False
    # Full ID of the user who created the emoji.
    created_by: str = ""

    @classmethod
    def from_json(cls, name: str, data: dict[str, Any]) -> "Emoji":
        return cls(
            name=name,
            url=data.get("url") or "",
            user_flair_allowed=bool(data.get("user_flair_allowed")),
            post_flair_allowed=bool(data.get("post_flair_allowed")),
            mod_flair_only=bool(data.get("mod_flair_only")),
            created_by=data.get("created_by") or "",
        )


@dataclass
class EmojiCreateOrUpdateRequest:
    """A request to create or update an emoji. Unset permissions are left out."""

    name: str = ""
    user_flair_allowed: bool | None = None
    post_flair_allowed: bool | None = None
    mod_flair_only: bool | None = None

    def validate(self) -> None:
        """Raise ValueError if the request cannot be sent."""
        if not self.name:
            raise ValueError("EmojiCreateOrUpdateRequest.name: cannot be empty")

    def to_form(self) -> dict[str, str]:
        form = {"name": self.name}
        for key, value in (
            ("user_flair_allowed", self.user_flair_allowed),
            ("post_flair_allowed", self.post_flair_allowed),
            ("mod_flair_only", self.mod_flair_only),
        ):
            if value is not None:
                form[key] = _bool_value(value)
        return form


def _validated(request: EmojiCreateOrUpdateRequest | None) -> EmojiCreateOrUpdateRequest:
    if request is None:
        raise ValueError("EmojiCreateOrUpdateRequest: cannot be None")
    request.validate()
    return request


def _emojis(mapping: Any) -> list[Emoji]:
    if not isinstance(mapping, dict):
        return []
    return [Emoji.from_json(name, data or {}) for name, data in mapping.items()]


class EmojiService:
    """Emoji related endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def get(self, subreddit: str) -> tuple[list[Emoji], list[Emoji], Response]:
        """Return the default emojis and the subreddit's emojis, respectively."""
        data, response = self._client.request("GET", f"api/v1/{subreddit}/emojis/all")
        root = data if isinstance(data, dict) else {}
        defaults = _emojis(root.get("snoomojis"))
        subreddit_emojis = next(
            (_emojis(value) for key, value in root.items() if key.startswith(KIND_SUBREDDIT)),
            [],
        )
        return defaults, subreddit_emojis, response

    def delete(self, subreddit: str, emoji: str) -> Response:
        """Delete the emoji from the subreddit."""
        _, response = self._client.request("DELETE", f"api/v1/{subreddit}/emoji/{emoji}")
        return response

    def set_size(self, subreddit: str, height: int, width: int) -> Response:
        """Set the custom emoji size; both must be between 1 and 40 (inclusive)."""
        _, response = self._client.request(
            "POST",
            f"api/v1/{subreddit}/emoji_custom_size",
            form={"height": str(height), "width": str(width)},
        )
        return response

    def disable_custom_size(self, subreddit: str) -> Response:
        """Disable the custom emoji size in the subreddit."""
        _, response = self._client.request("POST", f"api/v1/{subreddit}/emoji_custom_size")
        return response

    def _lease(self, subreddit: str, image_path: str) -> tuple[str, dict[str, str]]:
        mimetype = "image/png" if image_path.lower().endswith(".png") else "image/jpeg"
        data, _ = self._client.request(
            "POST",
            f"api/v1/{subreddit}/emoji_asset_upload_s3.json",
            form={"filepath": image_path, "mimetype": mimetype},
        )
        lease = (data or {}).get("s3UploadLease") or {}
        upload_url = f"http:{lease.get('action') or ''}"
        fields = {item.get("name") or "": item.get("value") or "" for item in lease.get("fields") or []}
        return upload_url, fields

    def upload(
        self,
        subreddit: str,
        create_request: EmojiCreateOrUpdateRequest | None,
        image_path: str,
    ) -> Response:
        """Upload an image file as an emoji of the subreddit."""
        request = _validated(create_request)
        upload_url, fields = self._lease(subreddit, image_path)

        with open(image_path, "rb") as image:
            # The storage service ignores fields sent after the file, so they go first.
            http = requests.post(
                upload_url,
                data=fields,
                files={"file": (os.path.basename(image_path), image)},
            )
        check_response(http)

        form = request.to_form()
        form["s3_key"] = fields.get("key", "")
        _, response = self._client.request("POST", f"api/v1/{subreddit}/emoji.json", form=form)
        return response

    def update(
        self, subreddit: str, update_request: EmojiCreateOrUpdateRequest | None
    ) -> Response:
        """Update the permissions of an emoji of the subreddit."""
        request = _validated(update_request)
        _, response = self._client.request(
            "POST", f"api/v1/{subreddit}/emoji_permissions", form=request.to_form()
        )
        return response
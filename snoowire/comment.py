"""Submitting and editing comments."""

from __future__ import annotations

from typing import Any

from snoowire.client import Client, Response


class CommentService:
    """Comment related endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _usertext(self, path: str, id_field: str, thing_id: str, text: str) -> tuple[Any, Response]:
        form = {
            "api_type": "json",
            "return_rtjson": "true",
            id_field: thing_id,
            "text": text,
        }
        return self._client.request("POST", path, form=form)

    def submit(self, parent_id: str, text: str) -> tuple[Any, Response]:
        """Reply to a post, comment or message; return the new comment's JSON object."""
        return self._usertext("api/comment", "parent", parent_id, text)

    def edit(self, id: str, text: str) -> tuple[Any, Response]:
        """Edit a comment; return the updated comment's JSON object."""
        return self._usertext("api/editusertext", "thing_id", id, text)
"""Fetching posts, comments and subreddits by their full IDs."""

from __future__ import annotations

from snoowire.client import KIND_COMMENT, KIND_POST, KIND_SUBREDDIT, Client, Response


def _of_kind(children: list[dict], kind: str) -> list[dict]:
    return [child.get("data") for child in children if child.get("kind") == kind]


class ListingsService:
    """Listing related endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def get(self, *args: str) -> tuple[list[dict], list[dict], list[dict], Response]:
        """Return the posts, comments and subreddits with the given full IDs."""
        params = {"id": ",".join(args)} if args else None
        children, response = self._client.get_listing("api/info", params)
        return (
            _of_kind(children, KIND_POST),
            _of_kind(children, KIND_COMMENT),
            _of_kind(children, KIND_SUBREDDIT),
            response,
        )

    def get_posts(self, *args: str) -> tuple[list[dict], Response]:
        """Return the posts with the given full IDs."""
        children, response = self._client.get_listing(f"by_id/{','.join(args)}")
        return _of_kind(children, KIND_POST), response
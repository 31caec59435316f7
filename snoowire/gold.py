"""Gold: gilding things and giving gold to users."""

from __future__ import annotations

from snoowire.client import Client, Response


class GoldService:
    """Gold related endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def gild(self, id: str) -> Response:
        """Gild a post or comment by its full ID, spending coins."""
        _, response = self._client.request("POST", f"api/v1/gold/gild/{id}")
        return response

    def give(self, username: str, months: int) -> Response:
        """Give a user between 1 and 36 (inclusive) months of gold."""
        if not 1 <= months <= 36:
            raise ValueError("months: must be between 1 and 36 (inclusive)")
        _, response = self._client.request(
            "POST", f"api/v1/gold/give/{username}", form={"months": str(months)}
        )
        return response
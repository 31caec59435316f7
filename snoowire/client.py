"""Core HTTP client: requests, responses, rate limits and API errors."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

import requests

DEFAULT_BASE_URL = "https://oauth.reddit.com/"
DEFAULT_USER_AGENT = "snoowire"

KIND_COMMENT = "t1"
KIND_USER = "t2"
KIND_POST = "t3"
KIND_MESSAGE = "t4"
KIND_SUBREDDIT = "t5"
KIND_LISTING = "Listing"

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """Turn an API timestamp (epoch seconds, or ``false`` for "never") into a datetime."""
    if value is None:
        return None
    if value is False or value == "false":
        return _ZERO_TIME
    if isinstance(value, bool):
        raise ValueError(f"invalid timestamp: {value!r}")
    return datetime.fromtimestamp(float(value), tz=timezone.utc)


@dataclass(frozen=True)
class Rate:
    """Last known rate limit state of the client."""

    remaining: int = 0
    used: int = 0
    reset: datetime | None = None


def _rate_from_headers(headers: Mapping[str, str]) -> Rate | None:
    remaining = headers.get("x-ratelimit-remaining")
    used = headers.get("x-ratelimit-used")
    reset = headers.get("x-ratelimit-reset")
    if remaining is None and used is None and reset is None:
        return None
    return Rate(
        remaining=int(float(remaining or 0)),
        used=int(float(used or 0)),
        reset=datetime.now(timezone.utc) + timedelta(seconds=int(float(reset or 0))),
    )


@dataclass
class Response:
    """An HTTP response together with paging cursors and rate limit data."""

    raw: requests.Response = field(repr=False)
    rate: Rate = field(default_factory=Rate)
    after: str = ""
    before: str = ""

    @property
    def status_code(self) -> int:
        return self.raw.status_code


@dataclass
class ListOptions:
    """Paging options for listing endpoints."""

    limit: int = 0
    after: str = ""
    before: str = ""

    def to_params(self) -> dict[str, Any]:
        pairs = (("limit", self.limit), ("after", self.after), ("before", self.before))
        return {key: value for key, value in pairs if value}


@dataclass(frozen=True)
class APIError:
    """A single error entry reported by the API as ``[label, reason, field]``."""

    label: str
    reason: str
    field: str

    @classmethod
    def from_json(cls, data: Any) -> "APIError":
        values = [("" if item is None else str(item)) for item in list(data)[:3]]
        values += [""] * (3 - len(values))
        return cls(*values)

    def __str__(self) -> str:
        return f"field {json.dumps(self.field)} caused {self.label}: {self.reason}"


class RedditError(Exception):
    """Base class for errors reported by the API."""

    def __init__(self, response: requests.Response, message: str = "") -> None:
        super().__init__(message)
        self.response = response
        self.message = message

    def _prefix(self) -> str:
        request = self.response.request
        return f"{request.method} {request.url}: {self.response.status_code}"

    def __str__(self) -> str:
        return f"{self._prefix()} {self.message}"


class ErrorResponse(RedditError):
    """The API answered a request with an error status."""


class JSONErrorResponse(RedditError):
    """The API reported errors inside a successful response body."""

    def __init__(self, response: requests.Response, errors: list[APIError]) -> None:
        self.errors = list(errors)
        super().__init__(response, ";".join(str(error) for error in self.errors))


def _format_duration(seconds: int) -> str:
    if seconds == 0:
        return "0s"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


class RateLimitError(RedditError):
    """Too many requests were sent in the current rate limit window."""

    def __init__(self, rate: Rate, response: requests.Response, message: str) -> None:
        super().__init__(response, message)
        self.rate = rate

    def _format_reset(self) -> str:
        if self.rate.reset is None:
            seconds = 0
        else:
            seconds = round((self.rate.reset - datetime.now(timezone.utc)).total_seconds())
        if seconds < 0:
            return f"[rate limit was reset {_format_duration(-seconds)} ago]"
        return f"[rate limit will reset in {_format_duration(seconds)}]"

    def __str__(self) -> str:
        return f"{super().__str__()} {self._format_reset()}"


def _body_json(response: requests.Response) -> Any:
    if not response.content.strip():
        return None
    try:
        return response.json()
    except ValueError:
        return None


def check_response(response: requests.Response) -> None:
    """Raise the matching error if the response reports a failure."""
    body = _body_json(response)
    if 200 <= response.status_code < 300:
        if isinstance(body, dict) and isinstance(body.get("json"), dict):
            errors = body["json"].get("errors") or []
            if errors:
                raise JSONErrorResponse(response, [APIError.from_json(e) for e in errors])
        return

    message = ""
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        message = body["message"]
    message = message or response.reason or ""

    if response.status_code == 429:
        rate = _rate_from_headers(response.headers) or Rate()
        raise RateLimitError(rate, response, message)
    raise ErrorResponse(response, message)


def _encode(values: Any) -> dict[str, Any] | None:
    if values is None:
        return None
    if hasattr(values, "to_params"):
        values = values.to_params()
    encoded: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded[key] = value
    return encoded


class Client:
    """Sends requests to the API and decodes what comes back."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        username: str = "",
        session: requests.Session | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.username = username
        self.session = session if session is not None else requests.Session()
        self.user_agent = user_agent
        self.rate = Rate()

    def request(
        self,
        method: str,
        path: str,
        params: Any = None,
        form: Mapping[str, Any] | None = None,
        json_body: Any = None,
    ) -> tuple[Any, Response]:
        """Send a request; return the decoded JSON body (or None) and the response."""
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        http = self.session.request(
            method,
            self.base_url + path.lstrip("/"),
            params=_encode(params),
            data=_encode(form),
            json=json_body,
            headers=headers,
        )
        response = Response(http)
        rate = _rate_from_headers(http.headers)
        if rate is not None:
            response.rate = rate
            self.rate = rate

        check_response(http)

        if not http.content.strip():
            return None, response
        try:
            return http.json(), response
        except ValueError as exc:
            raise ErrorResponse(http, f"invalid JSON body: {exc}") from exc

    def get_thing(self, path: str, params: Any = None) -> tuple[Any, Response]:
        """Fetch a single thing object (``{"kind": ..., "data": ...}``)."""
        return self.request("GET", path, params=params)

    def get_listing(self, path: str, params: Any = None) -> tuple[list[dict], Response]:
        """Fetch a listing; return its children and set the paging cursors."""
        data, response = self.request("GET", path, params=params)
        if data is None:
            return [], response
        if not isinstance(data, dict):
            raise ValueError(f"expected a listing from {path}")
        listing = data.get("data") or {}
        response.after = listing.get("after") or ""
        response.before = listing.get("before") or ""
        return list(listing.get("children") or []), response
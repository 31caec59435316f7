"""Account endpoints: profile, karma, preferences, trophies and relationships."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from snoowire.client import Client, Response


@dataclass(frozen=True)
class SubredditKarma:
    """Post and comment karma earned in a single subreddit."""

    subreddit: str = ""
    post_karma: int = 0
    comment_karma: int = 0

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SubredditKarma":
        return cls(
            subreddit=data.get("sr") or "",
            post_karma=int(data.get("link_karma") or 0),
            comment_karma=int(data.get("comment_karma") or 0),
        )


def _pref(key: str | None = None) -> Any:
    """A preference that is unset (None) unless the API or the caller gives it."""
    return field(default=None, metadata={"json": key} if key else {})


@dataclass
class Settings:
    """The user's account preferences. Unset preferences are None."""

    accept_private_messages: str | None = _pref("accept_pms")
    activity_relevant_ads: bool | None = _pref()
    allow_click_tracking: bool | None = _pref("allow_clicktracking")
    beta: bool | None = _pref()
    show_recently_viewed_posts: bool | None = _pref("clickgadget")
    collapse_read_messages: bool | None = _pref()
    compress: bool | None = _pref()
    creddit_autorenew: bool | None = _pref()
    default_comment_sort: str | None = _pref()
    show_domain_details: bool | None = _pref("domain_details")
    send_email_digests: bool | None = _pref("email_digests")
    send_messages_as_emails: bool | None = _pref("email_messages")
    unsubscribe_from_all_emails: bool | None = _pref("email_unsubscribe_all")
    disable_custom_themes: bool | None = _pref("enable_default_themes")
    location: str | None = _pref("geopopular")
    hide_ads: bool | None = _pref()
    hide_from_search_engines: bool | None = _pref("hide_from_robots")
    hide_upvoted_posts: bool | None = _pref("hide_ups")
    hide_downvoted_posts: bool | None = _pref("hide_downs")
    highlight_controversial_comments: bool | None = _pref("highlight_controversial")
    highlight_new_comments: bool | None = _pref()
    ignore_suggested_sorts: bool | None = _pref("ignore_suggested_sort")
    use_new_reddit: bool | None = _pref("in_redesign_beta")
    uses_new_reddit: bool | None = _pref("design_beta")
    label_nsfw: bool | None = _pref()
    language: str | None = _pref("lang")
    show_old_search_page: bool | None = _pref("legacy_search")
    enable_notifications: bool | None = _pref("live_orangereds")
    mark_messages_as_read: bool | None = _pref("mark_messages_read")
    show_thumbnails: str | None = _pref("media")
    auto_expand_media: str | None = _pref("media_preview")
    minimum_comment_score: int | None = _pref("min_comment_score")
    minimum_post_score: int | None = _pref("min_link_score")
    enable_mention_notifications: bool | None = _pref("monitor_mentions")
    open_links_in_new_window: bool | None = _pref("newwindow")
    dark_mode: bool | None = _pref("nightmode")
    disable_profanity: bool | None = _pref("no_profanity")
    number_of_comments: int | None = _pref("num_comments")
    number_of_posts: int | None = _pref("numsites")
    show_spotlight_box: bool | None = _pref("organic")
    subreddit_theme: str | None = _pref("other_theme")
    show_nsfw: bool | None = _pref("over_18")
    enable_private_rss_feeds: bool | None = _pref("private_feeds")
    profile_opt_out: bool | None = _pref()
    publicize_votes: bool | None = _pref("public_votes")
    allow_research: bool | None = _pref("research")
    include_nsfw_search_results: bool | None = _pref("search_include_over_18")
    receive_crosspost_messages: bool | None = _pref("send_crosspost_messages")
    receive_welcome_messages: bool | None = _pref("send_welcome_messages")
    show_user_flair: bool | None = _pref("show_flair")
    show_post_flair: bool | None = _pref("show_link_flair")
    show_gold_expiration: bool | None = _pref()
    show_location_based_recommendations: bool | None = _pref()
    show_promote: bool | None = _pref()
    show_custom_subreddit_themes: bool | None = _pref("show_stylesheets")
    show_trending_subreddits: bool | None = _pref("show_trending")
    show_twitter: bool | None = _pref()
    store_visits: bool | None = _pref()
    theme_selector: str | None = _pref()
    allow_third_party_data_ad_personalization: bool | None = _pref(
        "third_party_data_personalized_ads"
    )
    allow_third_party_site_data_ad_personalization: bool | None = _pref(
        "third_party_site_data_personalized_ads"
    )
    allow_third_party_site_data_content_personalization: bool | None = _pref(
        "third_party_site_data_personalized_content"
    )
    enable_threaded_messages: bool | None = _pref("threaded_messages")
    enable_threaded_modmail: bool | None = _pref("threaded_modmail")
    top_karma_subreddits: bool | None = _pref()
    use_global_defaults: bool | None = _pref()
    enable_video_autoplay: bool | None = _pref("video_autoplay")

    @staticmethod
    def _keys() -> list[tuple[str, str]]:
        return [(f.name, f.metadata.get("json", f.name)) for f in fields(Settings)]

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Settings":
        return cls(**{name: data.get(key) for name, key in cls._keys()})

    def to_json(self) -> dict[str, Any]:
        """The set preferences as an API JSON object; unset ones are left out."""
        values = ((key, getattr(self, name)) for name, key in self._keys())
        return {key: value for key, value in values if value is not None}


def _relationships(root: Any) -> list[dict]:
    if not isinstance(root, dict):
        return []
    return list((root.get("data") or {}).get("children") or [])


class AccountService:
    """Endpoints about the authenticated account."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def info(self) -> tuple[Any, Response]:
        """Return general information about your account as a JSON object."""
        return self._client.request("GET", "api/v1/me")

    def karma(self) -> tuple[list[SubredditKarma], Response]:
        """Return a breakdown of your karma per subreddit."""
        thing, response = self._client.get_thing("api/v1/me/karma")
        items = (thing or {}).get("data") or []
        return [SubredditKarma.from_json(item) for item in items], response

    def settings(self) -> tuple[Settings, Response]:
        """Return your account settings."""
        data, response = self._client.request("GET", "api/v1/me/prefs")
        return Settings.from_json(data or {}), response

    def update_settings(self, settings: Settings) -> tuple[Settings, Response]:
        """Update your account settings and return the resulting settings."""
        data, response = self._client.request(
            "PATCH", "api/v1/me/prefs", json_body=settings.to_json()
        )
        return Settings.from_json(data or {}), response

    def trophies(self) -> tuple[list[dict], Response]:
        """Return your trophies as JSON objects."""
        thing, response = self._client.get_thing("api/v1/me/trophies")
        entries = ((thing or {}).get("data") or {}).get("trophies") or []
        return [entry.get("data") for entry in entries], response

    def friends(self) -> tuple[list[dict], Response]:
        """Return your friends."""
        data, response = self._client.request("GET", "prefs/friends")
        first = data[0] if isinstance(data, list) and data else None
        return _relationships(first), response

    def blocked(self) -> tuple[list[dict], Response]:
        """Return the users you have blocked."""
        data, response = self._client.request("GET", "prefs/blocked")
        return _relationships(data), response

    def messaging(self) -> tuple[list[dict], list[dict], Response]:
        """Return blocked users and trusted users, respectively."""
        data, response = self._client.request("GET", "prefs/messaging")
        lists = list(data) if isinstance(data, list) else []
        lists += [None] * (2 - len(lists))
        return _relationships(lists[0]), _relationships(lists[1]), response

    def trusted(self) -> tuple[list[dict], Response]:
        """Return your trusted users."""
        data, response = self._client.request("GET", "prefs/trusted")
        return _relationships(data), response

    def add_trusted(self, username: str) -> Response:
        """Add a user to your trusted users."""
        _, response = self._client.request(
            "POST", "api/add_whitelisted", form={"api_type": "json", "name": username}
        )
        return response

    def remove_trusted(self, username: str) -> Response:
        """Remove a user from your trusted users."""
        _, response = self._client.request(
            "POST", "api/remove_whitelisted", form={"name": username}
        )
        return response
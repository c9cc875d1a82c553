"""Content filtering rules applied to shows at ingestion."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .schemas import Show

SPORTS_LABEL = "sports"
NEWS_TYPES = frozenset({"news", "talk show"})


class ContentPolicy(BaseModel):
    """Data-driven filter configuration.

    Country codes are normalised to upper case and every other entry to
    lower case, so lookups can compare directly.
    """

    model_config = ConfigDict(frozen=True)

    allowed_countries: frozenset[str] = Field(
        default=frozenset({"US", "GB", "CA", "AU", "IE", "NZ"})
    )
    blocked_channel_names: frozenset[str] = Field(default=frozenset({"iqiyi"}))
    blocked_channel_substrings: tuple[str, ...] = Field(default=("youtube",))
    news_exemption_enabled: bool = False
    news_exempt_genres: frozenset[str] = Field(
        default=frozenset({"game show", "quiz", "panel show"})
    )

    @field_validator("allowed_countries", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return frozenset(str(code).strip().upper() for code in value if str(code).strip())

    @field_validator("blocked_channel_names", "news_exempt_genres", mode="before")
    @classmethod
    def _lower_set(cls, value: Any) -> Any:
        return frozenset(str(item).strip().lower() for item in value if str(item).strip())

    @field_validator("blocked_channel_substrings", mode="before")
    @classmethod
    def _lower_tuple(cls, value: Any) -> Any:
        return tuple(str(item).strip().lower() for item in value if str(item).strip())


DEFAULT_POLICY = ContentPolicy()


def _lower(value: str | None) -> str:
    return (value or "").strip().lower()


def is_sports(show: Show) -> bool:
    if _lower(show.type) == SPORTS_LABEL:
        return True
    return any(_lower(genre) == SPORTS_LABEL for genre in show.genres)


def is_news(show: Show, policy: ContentPolicy = DEFAULT_POLICY) -> bool:
    if _lower(show.type) not in NEWS_TYPES:
        return False
    if policy.news_exemption_enabled:
        if any(_lower(genre) in policy.news_exempt_genres for genre in show.genres):
            return False
    return True


def show_country(show: Show) -> str | None:
    """Country code of the network, else of the web channel."""

    for channel in (show.network, show.web_channel):
        if channel is not None and channel.country_code:
            return channel.country_code
    return None


def is_foreign(show: Show, policy: ContentPolicy = DEFAULT_POLICY) -> bool:
    code = show_country(show)
    if not code:
        return False
    return code.strip().upper() not in policy.allowed_countries


def is_blocked_channel(show: Show, policy: ContentPolicy = DEFAULT_POLICY) -> bool:
    if show.web_channel is None:
        return False
    name = _lower(show.web_channel.name)
    if not name:
        return False
    if name in policy.blocked_channel_names:
        return True
    return any(fragment in name for fragment in policy.blocked_channel_substrings)


def is_excluded(show: Show, policy: ContentPolicy = DEFAULT_POLICY) -> bool:
    """Return True when the show must be kept out of the catalog."""

    return (
        is_sports(show)
        or is_news(show, policy)
        or is_foreign(show, policy)
        or is_blocked_channel(show, policy)
    )

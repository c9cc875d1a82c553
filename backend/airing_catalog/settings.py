"""Runtime configuration for the catalog builder."""
from __future__ import annotations

from datetime import date
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .filters import ContentPolicy


class CatalogSettings(BaseSettings):
    """Environment-aware settings for a catalog build."""

    output_dir: Path = Field(
        default=Path("."), description="Root directory the static catalog tree is written under."
    )
    catalog_type: str = Field(default="series", description="Catalog type segment of the output path.")
    catalog_id: str = Field(
        default="tvmaze_weekly_schedule", description="Catalog identifier used as the output file name."
    )
    window_days: int = Field(
        default=10, ge=1, description="Number of trailing days, today included, treated as recent."
    )
    reference_date: date | None = Field(
        default=None, description="Fixed 'today' for reproducible builds; UTC date when unset."
    )
    tmdb_api_key: str | None = Field(
        default=None, description="TMDB API key used for identifier fallbacks."
    )
    tvmaze_min_interval: float = Field(
        default=0.15, ge=0, description="Minimum spacing in seconds between schedule API calls."
    )
    rate_limited_hosts: list[str] = Field(
        default_factory=lambda: ["api.tvmaze.com"],
        description="Hostnames whose calls share the rate limiter.",
    )
    request_timeout: float | None = Field(
        default=None, description="Per-request timeout in seconds; transport default when unset."
    )
    allowed_countries: list[str] = Field(
        default_factory=lambda: ["US", "GB", "CA", "AU", "IE", "NZ"],
        description="Channel country codes that are allowed into the catalog.",
    )
    blocked_channel_names: list[str] = Field(
        default_factory=lambda: ["iqiyi"], description="Web channel names that are always excluded."
    )
    blocked_channel_substrings: list[str] = Field(
        default_factory=lambda: ["youtube"],
        description="Substrings that exclude a web channel when found in its name.",
    )
    news_exemption_enabled: bool = Field(
        default=False,
        description="Keep news and talk shows whose genres include an exempt genre.",
    )
    news_exempt_genres: list[str] = Field(
        default_factory=lambda: ["game show", "quiz", "panel show"],
        description="Genres that lift the news/talk show exclusion when the exemption is enabled.",
    )
    log_level: str = Field(default="INFO", description="Logging level for the build.")

    model_config = SettingsConfigDict(
        env_prefix="AIRING_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def output_path(self) -> Path:
        return self.output_dir / "catalog" / self.catalog_type / f"{self.catalog_id}.json"

    def content_policy(self) -> ContentPolicy:
        """Build the content filter policy from the configured lists."""

        return ContentPolicy(
            allowed_countries=self.allowed_countries,
            blocked_channel_names=self.blocked_channel_names,
            blocked_channel_substrings=self.blocked_channel_substrings,
            news_exemption_enabled=self.news_exemption_enabled,
            news_exempt_genres=self.news_exempt_genres,
        )

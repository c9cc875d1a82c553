"""Pydantic models for schedule records and the emitted catalog."""
from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Country(BaseModel):
    """Country block attached to a network or web channel."""

    model_config = ConfigDict(extra="ignore")

    code: str | None = None
    name: str | None = None


class Channel(BaseModel):
    """Broadcast network or streaming web channel."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    country: Country | None = None

    @property
    def country_code(self) -> str | None:
        if self.country is None:
            return None
        return self.country.code or None


class ShowImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    medium: str | None = None
    original: str | None = None


class Externals(BaseModel):
    """Cross-reference identifiers published for a show."""

    model_config = ConfigDict(extra="ignore")

    imdb: str | None = Field(default=None, description="Industry (IMDb) identifier.")
    thetvdb: int | None = Field(default=None, description="TheTVDB series identifier.")
    tvrage: int | None = None


class Show(BaseModel):
    """Television series as returned by the schedule source."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    name: str = ""
    type: str | None = None
    genres: list[str] = Field(default_factory=list)
    premiered: str | None = None
    summary: str | None = None
    image: ShowImage | None = None
    network: Channel | None = None
    web_channel: Channel | None = Field(default=None, alias="webChannel")
    externals: Externals = Field(default_factory=Externals)

    @field_validator("name", mode="before")
    @classmethod
    def _name_default(cls, value: Any) -> Any:
        return value if value is not None else ""

    @field_validator("genres", mode="before")
    @classmethod
    def _genres_default(cls, value: Any) -> Any:
        if value is None:
            return []
        return [genre for genre in value if isinstance(genre, str)]

    @field_validator("externals", mode="before")
    @classmethod
    def _externals_default(cls, value: Any) -> Any:
        return value if value is not None else {}

    @property
    def premiere_year(self) -> int | None:
        if not self.premiered:
            return None
        try:
            return int(self.premiered.split("-")[0])
        except ValueError:
            return None


class Episode(BaseModel):
    """One aired installment of a show."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = Field(default=None, description="Internal episode identifier.")
    show_id: int | None = None
    name: str = ""
    season: int | None = None
    number: int | None = None
    airdate: str | None = None
    airstamp: str | None = None
    summary: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_default(cls, value: Any) -> Any:
        return value if value is not None else ""


class VideoEntry(BaseModel):
    """Episode row nested under a catalog entry."""

    id: str
    title: str
    season: int | None = None
    episode: int | None = None
    released: date
    overview: str = ""


class CatalogMeta(BaseModel):
    """Per-show record of the static catalog."""

    id: str = Field(description="Canonical cross-reference identifier.")
    type: Literal["series"] = Field(default="series")
    name: str
    description: str = ""
    poster: str | None = None
    background: str | None = None
    videos: list[VideoEntry] = Field(default_factory=list)


class CatalogDocument(BaseModel):
    """Top-level shape of the serialized catalog artifact."""

    metas: list[CatalogMeta] = Field(default_factory=list)

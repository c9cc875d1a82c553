"""Builders and stubs shared by the catalog builder tests."""
from __future__ import annotations

from typing import Any

from backend.airing_catalog.discovery import TVMAZE_ENDPOINT
from backend.airing_catalog.identifiers import TmdbClient


def make_show(show_id: int = 1, **overrides: Any) -> dict[str, Any]:
    """Return a TVmaze-shaped show payload."""

    show: dict[str, Any] = {
        "id": show_id,
        "name": f"Show {show_id}",
        "type": "Scripted",
        "genres": ["Drama"],
        "premiered": "2021-09-14",
        "summary": "<p>A <b>drama</b> series.</p>",
        "image": {
            "medium": f"https://img.example/medium/{show_id}.jpg",
            "original": f"https://img.example/original/{show_id}.jpg",
        },
        "network": {"id": 10, "name": "NBC", "country": {"name": "United States", "code": "US"}},
        "webChannel": None,
        "externals": {"tvrage": None, "thetvdb": 7000 + show_id, "imdb": f"tt{show_id:07d}"},
    }
    show.update(overrides)
    return show


def make_record(
    show: dict[str, Any],
    *,
    episode_id: int = 100,
    season: int | None = 1,
    number: int | None = 1,
    airdate: str | None = "2024-03-05",
    airstamp: str | None = None,
    embedded: bool = False,
    name: str | None = None,
) -> dict[str, Any]:
    """Return a schedule record with the show linked directly or under _embedded."""

    record: dict[str, Any] = {
        "id": episode_id,
        "name": name if name is not None else f"Episode {number}",
        "season": season,
        "number": number,
        "airdate": airdate,
        "airstamp": airstamp,
        "summary": "<p>Episode summary.</p>",
    }
    if embedded:
        record["_embedded"] = {"show": show}
    else:
        record["show"] = show
    return record


class StubAdapter:
    """In-memory replacement for the source adapter.

    ``schedules`` is keyed by (path, date) such as ``("/schedule/web", "2024-03-05")``
    and ``tmdb`` by TMDB path such as ``"/find/7001"``.
    """

    def __init__(
        self,
        schedules: dict[tuple[str, str], Any] | None = None,
        tmdb: dict[str, Any] | None = None,
    ) -> None:
        self.schedules = schedules or {}
        self.tmdb = tmdb or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def fetch_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        query = dict(params or {})
        self.calls.append((url, query))
        if url.startswith(TVMAZE_ENDPOINT):
            return self.schedules.get((url[len(TVMAZE_ENDPOINT):], query.get("date")))
        if url.startswith(TmdbClient.TMDB_ENDPOINT):
            return self.tmdb.get(url[len(TmdbClient.TMDB_ENDPOINT):])
        return None

    def tmdb_calls(self) -> list[tuple[str, dict[str, Any]]]:
        return [call for call in self.calls if call[0].startswith(TmdbClient.TMDB_ENDPOINT)]

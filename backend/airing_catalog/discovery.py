"""
Schedule discovery across the trailing window of TVmaze daily listings.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Set, Tuple

from pydantic import ValidationError

from .fetch import SourceAdapter
from .filters import DEFAULT_POLICY, ContentPolicy, is_excluded
from .schemas import Episode, Show
from .window import window_dates

logger = logging.getLogger(__name__)

TVMAZE_ENDPOINT = "https://api.tvmaze.com"

# (label, path, extra query params); every variant also receives the date.
SCHEDULE_VARIANTS: Tuple[Tuple[str, str, Dict[str, str]], ...] = (
    ("national", "/schedule", {"country": "US"}),
    ("web", "/schedule/web", {}),
    ("full", "/schedule/full", {}),
)

EpisodeKey = Tuple[Optional[int], Optional[int]]


@dataclass
class ShowEntry:
    show: Show
    episodes: List[Episode] = field(default_factory=list)

    def add(self, episode: Episode) -> None:
        self.episodes.append(episode)

    def unique_episodes(self) -> List[Episode]:
        """Episodes with repeated (season, episode) pairs dropped, first sighting kept."""

        seen: Set[EpisodeKey] = set()
        unique: List[Episode] = []
        for episode in self.episodes:
            key = episode_key(episode)
            if key in seen:
                continue
            seen.add(key)
            unique.append(episode)
        return unique


def episode_key(episode: Episode) -> EpisodeKey:
    ordinal = episode.number if episode.number is not None else episode.id
    return (episode.season, ordinal)


def linked_show(record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """The show embedded in a schedule record, in either of its two placements."""

    show = record.get("show")
    if isinstance(show, dict):
        return show
    embedded = record.get("_embedded")
    if isinstance(embedded, dict) and isinstance(embedded.get("show"), dict):
        return embedded["show"]
    return None


class ScheduleDiscovery:
    """Collects per-show aggregates from the daily schedule listings."""

    def __init__(
        self,
        adapter: SourceAdapter,
        *,
        policy: ContentPolicy = DEFAULT_POLICY,
        base_url: str = TVMAZE_ENDPOINT,
    ) -> None:
        self.adapter = adapter
        self.policy = policy
        self.base_url = base_url.rstrip("/")
        self.excluded_ids: Set[int] = set()

    def fetch_day(self, day: date) -> List[Any]:
        records: List[Any] = []
        for label, path, params in SCHEDULE_VARIANTS:
            query = {**params, "date": day.isoformat()}
            data = self.adapter.fetch_json(f"{self.base_url}{path}", params=query)
            if not isinstance(data, list):
                logger.debug("Schedule %s for %s returned no listing", label, day)
                continue
            records.extend(data)
        return records

    def discover(self, window_size: int, today: date) -> Dict[int, ShowEntry]:
        entries: Dict[int, ShowEntry] = {}
        for day in window_dates(window_size, today):
            for record in self.fetch_day(day):
                self._ingest(entries, record)
        logger.info(
            "Discovered %d shows over %d days (%d excluded)",
            len(entries),
            window_size,
            len(self.excluded_ids),
        )
        return entries

    def _ingest(self, entries: Dict[int, ShowEntry], record: Any) -> None:
        if not isinstance(record, dict):
            return
        raw_show = linked_show(record)
        if not raw_show or raw_show.get("id") is None:
            return

        try:
            show = Show.model_validate(raw_show)
            episode = Episode.model_validate({**record, "show_id": show.id})
        except ValidationError as exc:
            logger.debug("Skipping malformed schedule record: %s", exc)
            return

        if show.id in self.excluded_ids:
            return
        if is_excluded(show, self.policy):
            self.excluded_ids.add(show.id)
            logger.debug("Excluded %s (%s)", show.name, show.id)
            return

        entry = entries.get(show.id)
        if entry is None:
            entry = ShowEntry(show=show)
            entries[show.id] = entry
        entry.add(episode)


def discover(
    adapter: SourceAdapter,
    window_size: int,
    today: date,
    policy: ContentPolicy = DEFAULT_POLICY,
) -> Dict[int, ShowEntry]:
    return ScheduleDiscovery(adapter, policy=policy).discover(window_size, today)

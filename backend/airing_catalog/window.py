"""Recency window helpers.

"Today" is always the UTC calendar date. Episode dates are taken as
published by the schedule source, without time-zone conversion.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional

from .schemas import Episode

AIRDATE_SENTINEL = "0000-00-00"


def utc_today(now: Optional[datetime] = None) -> date:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def effective_date(episode: Episode) -> Optional[date]:
    """Prefer the explicit air date, else the date part of the air timestamp."""

    if episode.airdate and episode.airdate != AIRDATE_SENTINEL:
        parsed = _parse_date(episode.airdate)
        if parsed is not None:
            return parsed
    return _parse_date(episode.airstamp)


def window_start(n: int, today: date) -> date:
    return today - timedelta(days=n - 1)


def window_dates(n: int, today: date) -> List[date]:
    """Dates of the trailing window, oldest first."""

    if n < 1:
        return []
    start = window_start(n, today)
    return [start + timedelta(days=offset) for offset in range(n)]


def filter_recent(episodes: Iterable[Episode], n: int, today: date) -> List[Episode]:
    if n < 1:
        return []
    start = window_start(n, today)
    recent: List[Episode] = []
    for episode in episodes:
        released = effective_date(episode)
        if released is None or released > today:
            continue
        if start <= released:
            recent.append(episode)
    return recent

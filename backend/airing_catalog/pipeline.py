"""
One full catalog rebuild: discover, window, resolve, assemble, write.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional

from .assembler import build_meta, order_metas, write_catalog
from .discovery import ScheduleDiscovery
from .fetch import SourceAdapter
from .identifiers import IdentifierResolver, TmdbClient
from .schemas import CatalogMeta
from .settings import CatalogSettings
from .window import filter_recent, utc_today

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    today: date
    output_path: Path
    shows_discovered: int = 0
    shows_excluded: int = 0
    shows_without_recent: int = 0
    shows_unresolved: int = 0
    shows_emitted: int = 0

    def to_dict(self) -> dict:
        return {
            "today": self.today.isoformat(),
            "output_path": str(self.output_path),
            "shows_discovered": self.shows_discovered,
            "shows_excluded": self.shows_excluded,
            "shows_without_recent": self.shows_without_recent,
            "shows_unresolved": self.shows_unresolved,
            "shows_emitted": self.shows_emitted,
        }


def build_metas(
    settings: CatalogSettings,
    adapter: SourceAdapter,
    today: date,
    report: BuildReport,
) -> List[CatalogMeta]:
    discovery = ScheduleDiscovery(adapter, policy=settings.content_policy())
    entries = discovery.discover(settings.window_days, today)
    report.shows_discovered = len(entries)
    report.shows_excluded = len(discovery.excluded_ids)

    resolver = IdentifierResolver(TmdbClient(adapter, api_key=settings.tmdb_api_key))
    if not resolver.client.enabled:
        logger.warning("TMDB key missing; only shows with an IMDb id can be resolved")

    metas: List[CatalogMeta] = []
    for entry in entries.values():
        recent = filter_recent(entry.unique_episodes(), settings.window_days, today)
        if not recent:
            report.shows_without_recent += 1
            continue

        canonical_id = resolver.resolve(entry.show)
        if not canonical_id:
            report.shows_unresolved += 1
            logger.info("Skipped (no identifier): %s", entry.show.name)
            continue

        metas.append(build_meta(entry.show, canonical_id, recent))
        logger.info("Added: %s %s", entry.show.name, canonical_id)

    return order_metas(metas)


def build_catalog(
    settings: Optional[CatalogSettings] = None,
    *,
    adapter: Optional[SourceAdapter] = None,
    today: Optional[date] = None,
) -> BuildReport:
    """Rebuild the catalog artifact and return a summary of the run."""

    settings = settings or CatalogSettings()
    today = today or settings.reference_date or utc_today()
    adapter = adapter or SourceAdapter.from_settings(settings)
    report = BuildReport(today=today, output_path=settings.output_path)

    metas = build_metas(settings, adapter, today, report)
    write_catalog(settings.output_path, metas)
    report.shows_emitted = len(metas)
    logger.info("Build complete: %d shows written to %s", len(metas), settings.output_path)
    return report

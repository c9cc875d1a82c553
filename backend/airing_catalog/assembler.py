"""
Assemble, order and persist the static series catalog.
"""
from __future__ import annotations

import html
import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

from .schemas import CatalogDocument, CatalogMeta, Episode, Show, ShowImage, VideoEntry
from .window import effective_date

logger = logging.getLogger(__name__)

TAG_RE = re.compile(r"<[^>]+>")


class CatalogWriteError(RuntimeError):
    """Raised when the catalog artifact cannot be written."""


def clean_html(text: Optional[str]) -> str:
    if not text:
        return ""
    return html.unescape(TAG_RE.sub("", text)).strip()


def pick_image(image: Optional[ShowImage]) -> Optional[str]:
    """Highest resolution image available, else None."""

    if image is None:
        return None
    return image.original or image.medium or None


def video_id(canonical_id: str, episode: Episode) -> str:
    season = episode.season if episode.season is not None else 0
    ordinal = episode.number if episode.number is not None else episode.id
    return f"{canonical_id}:{season}:{ordinal}"


def build_videos(canonical_id: str, episodes: Iterable[Episode]) -> List[VideoEntry]:
    videos: List[VideoEntry] = []
    seen: set[str] = set()
    for episode in episodes:
        released = effective_date(episode)
        if released is None:
            continue
        entry_id = video_id(canonical_id, episode)
        if entry_id in seen:
            continue
        seen.add(entry_id)
        videos.append(
            VideoEntry(
                id=entry_id,
                title=episode.name,
                season=episode.season,
                episode=episode.number,
                released=released,
                overview=clean_html(episode.summary),
            )
        )
    # Newest first; season and episode break ties within one air date.
    videos.sort(
        key=lambda v: (
            v.released,
            v.season if v.season is not None else -1,
            v.episode if v.episode is not None else -1,
            v.id,
        ),
        reverse=True,
    )
    return videos


def build_meta(show: Show, canonical_id: str, episodes: Iterable[Episode]) -> CatalogMeta:
    image = pick_image(show.image)
    return CatalogMeta(
        id=canonical_id,
        name=show.name,
        description=clean_html(show.summary),
        poster=image,
        background=image,
        videos=build_videos(canonical_id, episodes),
    )


def order_metas(metas: Iterable[CatalogMeta]) -> List[CatalogMeta]:
    """Most recently active show first; name then id keep ties stable."""

    ordered = sorted(metas, key=lambda meta: (meta.name.lower(), meta.id))
    ordered.sort(
        key=lambda meta: max((video.released for video in meta.videos), default=date.min),
        reverse=True,
    )
    return ordered


def render_catalog(metas: Iterable[CatalogMeta]) -> str:
    document = CatalogDocument(metas=list(metas))
    return json.dumps(document.model_dump(mode="json"), indent=2, ensure_ascii=False)


def write_catalog(path: Path, metas: Iterable[CatalogMeta]) -> Path:
    """Replace the artifact at ``path`` atomically."""

    payload = render_catalog(metas)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove temporary file %s", tmp_path)
        raise CatalogWriteError(f"Failed to write catalog to {path}: {exc}") from exc
    return path

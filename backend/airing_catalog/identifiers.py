"""
Canonical identifier resolution with TMDB fallbacks.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from .fetch import SourceAdapter
from .schemas import Show

logger = logging.getLogger(__name__)

TMDB_NAMESPACE = "tmdb"


class TmdbClient:
    TMDB_ENDPOINT = "https://api.themoviedb.org/3"

    def __init__(self, adapter: SourceAdapter, api_key: Optional[str] = None) -> None:
        self.adapter = adapter
        self.api_key = api_key or os.environ.get("TMDB_KEY")
        self.enabled = bool(self.api_key)

    def _first(self, path: str, params: Dict[str, Any], results_key: str) -> Optional[Dict[str, Any]]:
        data = self.adapter.fetch_json(
            f"{self.TMDB_ENDPOINT}{path}", params={"api_key": self.api_key, **params}
        )
        if not isinstance(data, dict):
            return None
        results = data.get(results_key) or []
        if not isinstance(results, list) or not results:
            return None
        first = results[0]
        return first if isinstance(first, dict) else None

    def find_by_tvdb(self, tvdb_id: int) -> Optional[Dict[str, Any]]:
        return self._first(f"/find/{tvdb_id}", {"external_source": "tvdb_id"}, "tv_results")

    def search_tv(self, name: str, year: Optional[int] = None) -> Optional[Dict[str, Any]]:
        params: Dict[str, Any] = {"query": name, "include_adult": "false"}
        if year:
            params["first_air_date_year"] = year
        return self._first("/search/tv", params, "results")


def namespaced(result: Optional[Dict[str, Any]]) -> Optional[str]:
    if not result:
        return None
    tmdb_id = result.get("id")
    if isinstance(tmdb_id, bool) or not isinstance(tmdb_id, int) or tmdb_id <= 0:
        return None
    return f"{TMDB_NAMESPACE}:{tmdb_id}"


class IdentifierResolver:
    """Resolves one canonical identifier per show.

    Order: IMDb id as published, then TMDB lookup by TVDB id, then TMDB
    search by name and premiere year. Lookup failures fall through to the
    next step; at most two calls are made per show.
    """

    def __init__(self, client: TmdbClient) -> None:
        self.client = client

    def resolve(self, show: Show) -> Optional[str]:
        imdb_id = (show.externals.imdb or "").strip()
        if imdb_id:
            return show.externals.imdb

        if not self.client.enabled:
            logger.debug("TMDB disabled; cannot resolve %s (%s)", show.name, show.id)
            return None

        if show.externals.thetvdb:
            resolved = namespaced(self.client.find_by_tvdb(show.externals.thetvdb))
            if resolved:
                return resolved

        if show.name:
            resolved = namespaced(self.client.search_tv(show.name, show.premiere_year))
            if resolved:
                return resolved

        logger.debug("No identifier for %s (%s)", show.name, show.id)
        return None


def resolve_id(show: Show, client: TmdbClient) -> Optional[str]:
    return IdentifierResolver(client).resolve(show)

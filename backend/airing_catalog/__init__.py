"""
Static catalog builder for currently airing series.

Aggregates the TVmaze daily schedules over a trailing window, filters
unwanted content, resolves IMDb/TMDB identifiers and writes a single
Stremio-style catalog JSON document.
"""

from .pipeline import BuildReport, build_catalog
from .settings import CatalogSettings

__all__ = ["BuildReport", "CatalogSettings", "build_catalog"]

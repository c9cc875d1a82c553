"""Command line interface for the catalog builder."""
from __future__ import annotations

import json
import logging

import typer
from dotenv import load_dotenv

from .assembler import CatalogWriteError
from .pipeline import build_catalog
from .settings import CatalogSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Rebuild the static catalog of currently airing series.",
    add_completion=False,
)


@app.command()
def build() -> None:
    """Run one full rebuild using environment configuration."""

    load_dotenv()
    settings = CatalogSettings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    try:
        report = build_catalog(settings)
    except CatalogWriteError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))

"""Console entry point for the catalog builder."""
from __future__ import annotations

from .cli import app


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()

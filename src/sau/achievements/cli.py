"""CLI entry point for sau. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from sau.achievements.app import AchievementManager
from sau.achievements.catalog import CatalogError, JsonCatalogClient
from sau.achievements.config import JsonConfigStore, get_config_dir
from sau.tui.terminal import ProcessTerminal

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CATALOG_FILE_NAME = "catalog.json"


def default_catalog_path() -> Path:
    return get_config_dir() / CATALOG_FILE_NAME


def configure_logging(level: str, log_file: str | None) -> None:
    """Send records to *log_file*; without one they are dropped.

    stdout and stderr belong to the terminal UI while it runs.
    """
    handlers: list[logging.Handler]
    if log_file:
        handlers = [logging.FileHandler(log_file)]
    else:
        handlers = [logging.NullHandler()]
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


@click.command()
@click.option("--id", "-i", "app_id", type=click.IntRange(0, 0xFFFFFFFF), default=None,
              help="Application id to load on start")
@click.option("--catalog", type=click.Path(dir_okay=False, path_type=Path), default=None,
              envvar="SAU_CATALOG", help="Achievement catalog JSON file")
@click.option("--log-level", default="info",
              type=click.Choice(["debug", "info", "warning", "error"]))
@click.option("--log-file", type=click.Path(dir_okay=False), default=None,
              help="Write logs to this file")
def main(app_id, catalog, log_level, log_file):
    """Interactively unlock and lock achievements."""
    configure_logging(log_level, log_file)

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        click.echo("sau needs an interactive terminal", err=True)
        sys.exit(1)

    client = JsonCatalogClient(catalog or default_catalog_path())
    manager = AchievementManager(client, JsonConfigStore())

    if app_id is not None:
        try:
            manager.load_app(app_id)
        except CatalogError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    manager.run(ProcessTerminal())


if __name__ == "__main__":
    main()

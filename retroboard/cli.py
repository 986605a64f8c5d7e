"""Retroboard CLI — export a retrospective board to CSV or plaintext.

Usage:
    retroboard URL csv                      # SprintRetro.csv in the cwd
    retroboard URL txt --output-dir exports
    retroboard URL CSV --browser firefox --timeout 60000
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from retroboard.common.config import ExportConfig
from retroboard.common.exceptions import (
    ArgumentValidationException,
    RetroboardException,
)
from retroboard.pipeline import ExitCode, run_export

logger = logging.getLogger(__name__)


@click.command()
@click.argument("url", required=False)
@click.argument("extension", required=False)
@click.option(
    "--browser",
    "browser_type",
    type=click.Choice(["chromium", "firefox", "webkit"]),
    default="chromium",
    show_default=True,
    help="Browser to render the board with.",
)
@click.option(
    "--headless/--headed",
    default=True,
    show_default=True,
    help="Run the browser without a window.",
)
@click.option(
    "--timeout",
    "timeout_ms",
    type=int,
    default=30_000,
    show_default=True,
    help="Milliseconds to wait for the page and board to load.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write the export to (default: current directory).",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
@click.version_option(package_name="retroboard")
def cli(
    url: str | None,
    extension: str | None,
    browser_type: str,
    headless: bool,
    timeout_ms: int,
    output_dir: Path | None,
    verbose: bool,
) -> None:
    """Export the retrospective board at URL as EXTENSION (csv or txt).

    The file is named after the board title with whitespace removed.

    \b
    Examples:
        retroboard https://retro.example.com/board/42 csv
        retroboard file:///tmp/board.html TXT --output-dir exports
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_kwargs = {
        "browser_type": browser_type,
        "headless": headless,
        "timeout_ms": timeout_ms,
    }
    if output_dir is not None:
        config_kwargs["output_dir"] = output_dir
    try:
        config = ExportConfig(**config_kwargs)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e

    sys.exit(export(url, extension, config))


def export(
    url: str | None, extension: str | None, config: ExportConfig
) -> ExitCode:
    """Run one export and report the outcome.

    Returns:
        The exit code for the process.
    """
    try:
        path = asyncio.run(run_export(url, extension, config))
    except ArgumentValidationException as e:
        click.echo(e.message, err=True)
        return ExitCode.INVALID_ARGUMENTS
    except RetroboardException as e:
        logger.error(f"Export failed: {e}")
        return ExitCode.RUN_FAILED

    click.echo(f"Successfully written to file at: {path}")
    return ExitCode.OK


def main() -> None:
    """Entry point for the ``retroboard`` console script."""
    cli()

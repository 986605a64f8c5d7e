"""The export pipeline: validate, extract, shape, write.

The pipeline returns the written path or raises; it never exits the
process. Mapping outcomes to exit codes is left to the CLI.
"""

from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING

from retroboard.common.config import ExportConfig
from retroboard.data_types import ExportFormat
from retroboard.extractor import extract_board
from retroboard.shaper import shape
from retroboard.validation import validate_arguments
from retroboard.writer import write_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from retroboard.common.page import BoardSession

    SessionFactory = Callable[
        [ExportConfig], AbstractAsyncContextManager[BoardSession]
    ]

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Process exit codes for the CLI."""

    OK = 0
    RUN_FAILED = 1
    INVALID_ARGUMENTS = 2


def playwright_session(
    config: ExportConfig,
) -> AbstractAsyncContextManager[BoardSession]:
    """Open a PlaywrightSession configured from config."""
    from retroboard.driver.playwright_driver import PlaywrightSession

    return PlaywrightSession.open(
        browser_type=config.browser_type,
        headless=config.headless,
        timeout_ms=config.timeout_ms,
    )


async def export_board(
    url: str,
    export_format: ExportFormat,
    config: ExportConfig,
    session: BoardSession,
) -> Path:
    """Extract the board at url, shape it and write the export file.

    Nothing is written unless extraction and shaping both succeed.

    Returns:
        Absolute path of the written file.
    """
    board = await extract_board(session, url, config.selectors)
    shaped = shape(board, export_format)
    return write_output(shaped, config.output_dir)


async def run_export(
    url: str | None,
    extension: str | None,
    config: ExportConfig | None = None,
    session_factory: SessionFactory | None = None,
) -> Path:
    """Validate the arguments and run a complete export.

    Arguments are validated before a browser session is opened.

    Args:
        url: Raw URL argument.
        extension: Raw extension argument ("csv" or "txt", any casing).
        config: Run configuration (default: ExportConfig()).
        session_factory: Opens the browser session (default: Playwright).

    Returns:
        Absolute path of the written file.

    Raises:
        ArgumentValidationException: If either argument is invalid.
        RetroboardException: For any failure after validation.
    """
    board_url, export_format = validate_arguments(url, extension)
    config = config or ExportConfig()
    session_factory = session_factory or playwright_session

    logger.debug(f"Exporting {board_url} as {export_format.extension}")
    async with session_factory(config) as session:
        return await export_board(board_url, export_format, config, session)

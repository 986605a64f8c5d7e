"""Writing shaped boards to disk.

The output file is named after the board title with all whitespace removed,
e.g. "Sprint Retro" exported as CSV becomes ``SprintRetro.csv``.
"""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path

from retroboard.common.exceptions import ExportWriteException
from retroboard.data_types import (
    ExportFormat,
    ShapedBoard,
    TabularOutput,
    TextOutput,
)

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s")


def output_path(
    title: str, export_format: ExportFormat, directory: Path | None = None
) -> Path:
    """Resolve the export path for a board title.

    Args:
        title: Board title; every whitespace character is removed.
        export_format: Determines the (lower-case) extension.
        directory: Target directory (default: current working directory).

    Returns:
        Absolute path of the export file.
    """
    filename = f"{_WHITESPACE_RE.sub('', title)}.{export_format.extension}"
    return ((directory or Path.cwd()) / filename).resolve()


def write_output(shaped: ShapedBoard, directory: Path | None = None) -> Path:
    """Persist shaped output and return the path written.

    Tabular output is written as CSV with minimal quoting; text output is
    written verbatim.

    Raises:
        ExportWriteException: If the file cannot be written, or the
            title contains path separators that would place it outside
            the output directory.
    """
    output = shaped.output
    target_dir = (directory or Path.cwd()).resolve()
    path = output_path(shaped.title, output.format, target_dir)

    # Separators in the scraped title must not pick the destination.
    if path.parent != target_dir:
        raise ExportWriteException(
            path, f"board title would escape {target_dir}"
        )

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        if isinstance(output, TabularOutput):
            with path.open("w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerows(output.rows)
        elif isinstance(output, TextOutput):
            path.write_text(output.text, encoding="utf-8", newline="")
    except OSError as e:
        raise ExportWriteException(path, e) from e

    logger.debug(f"Wrote {output.format.extension} export to {path}")
    return path

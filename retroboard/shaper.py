"""Shaping a Board into CSV rows or plaintext.

The two shapes deliberately treat votes differently:

- Tabular output drops messages with zero votes and places each surviving
  message by its original index within its column, not by its rank among
  surviving messages. A row is only created when no row exists yet at that
  index, and new rows are appended, so sparse votes can shift a message
  into an earlier row than its index suggests.
- Text output lists every message together with its vote count.
"""

from __future__ import annotations

from retroboard.data_types import (
    Board,
    ExportFormat,
    ShapedBoard,
    ShapedOutput,
    TabularOutput,
    TextOutput,
)


def build_tabular(board: Board) -> TabularOutput:
    """Build CSV rows from board.

    Row 0 holds column titles. Message j of column i lands in row j + 1
    when that row already exists; otherwise a new row of empty cells is
    appended with the message in cell i. Every row has exactly
    board.column_count cells.

    An empty board yields no rows at all (not even a header).
    """
    if not board.columns:
        return TabularOutput(rows=[])

    width = board.column_count
    rows: list[list[str]] = [[column.title for column in board.columns]]

    for i, column in enumerate(board.columns):
        for j, message in enumerate(column.messages):
            if message.votes <= 0:
                continue

            row_index = j + 1
            if row_index < len(rows):
                rows[row_index][i] = message.text
            else:
                row = [""] * width
                row[i] = message.text
                rows.append(row)

    return TabularOutput(rows=rows)


def build_text(board: Board) -> TextOutput:
    """Build the plaintext rendering of board.

    Format::

        Board Title

        Column Title
        - message text (votes)
        - message text (votes)

        Next Column
        - ...

    Columns without messages are omitted entirely.
    """
    parts = [f"{board.title}\n\n"]

    for column in board.columns:
        if not column.messages:
            continue
        parts.append(f"{column.title}\n")
        for message in column.messages:
            parts.append(f"- {message.text} ({message.votes})\n")
        parts.append("\n")

    return TextOutput(text="".join(parts))


def shape(board: Board, export_format: ExportFormat) -> ShapedBoard:
    """Shape board for export_format, keeping the title for file naming."""
    output: ShapedOutput
    if export_format is ExportFormat.CSV:
        output = build_tabular(board)
    else:
        output = build_text(board)
    return ShapedBoard(title=board.title, output=output)

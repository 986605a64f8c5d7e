"""Core data types for board export.

A Board is built once per run from the rendered page and never mutated.
The shaper turns it into one of two output shapes:

- TabularOutput: rows of cells, serialized as CSV
- TextOutput: a single pre-formatted string, written verbatim

ShapedBoard pairs the shaped output with the board title, which the
writer needs to derive the output filename.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ExportFormat(Enum):
    """Supported export formats.

    The value is the lower-cased file extension.
    """

    CSV = "csv"
    TXT = "txt"

    @property
    def extension(self) -> str:
        return self.value


@dataclass(frozen=True)
class Message:
    """One sticky note on the board.

    Attributes:
        text: Trimmed message body.
        votes: Vote count (>= 0 on a well-formed board).
    """

    text: str
    votes: int


@dataclass(frozen=True)
class Column:
    """One lane of the board with its messages in document order."""

    title: str
    messages: tuple[Message, ...] = ()


@dataclass(frozen=True)
class Board:
    """The full scraped board: a title and its columns in document order."""

    title: str
    columns: tuple[Column, ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class TabularOutput:
    """Rows of cells destined for CSV.

    Row 0 holds the column titles; every other row holds one cell per
    column, with empty strings where no message occupies that slot.
    """

    rows: list[list[str]] = field(default_factory=list)

    @property
    def format(self) -> ExportFormat:
        return ExportFormat.CSV


@dataclass(frozen=True)
class TextOutput:
    """A pre-formatted plaintext rendering of the board."""

    text: str

    @property
    def format(self) -> ExportFormat:
        return ExportFormat.TXT


ShapedOutput = TabularOutput | TextOutput


@dataclass(frozen=True)
class ShapedBoard:
    """Shaped output plus the board title used to name the file."""

    title: str
    output: ShapedOutput


@dataclass(frozen=True)
class BoardSelectors:
    """CSS selectors locating board content in the rendered page.

    Column-scoped selectors are evaluated relative to a column node, and
    message-scoped selectors relative to a message node.

    Attributes:
        board_title: The board name element.
        column: One element per column; also awaited as the board-ready signal.
        column_title: Column header, relative to a column.
        message: One element per message, relative to a column.
        message_text: Message body text, relative to a message.
        vote_count: Vote counter, relative to a message.
    """

    board_title: str = ".board-name"
    column: str = ".message-list"
    column_title: str = ".column-header"
    message: str = ".message-main"
    message_text: str = ".message-body .text"
    vote_count: str = ".votes .vote-area span.show-vote-count"

"""Browser capability protocols consumed by board extraction.

Extraction only needs a handful of DOM operations, so it depends on these
protocols rather than on Playwright directly. The Playwright driver
implements them against a live browser; tests implement them against
static HTML.

Every method is a coroutine and is awaited strictly in sequence by the
extractor.
"""

from __future__ import annotations

import re
from typing import Protocol

from retroboard.common.exceptions import VoteCountParseException

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class BoardNode(Protocol):
    """A queryable DOM node: the page itself, a column, or a message.

    Selectors are CSS and are evaluated relative to this node.
    """

    @property
    def url(self) -> str:
        """URL of the page this node belongs to, for error reporting."""
        ...

    async def read_text(self, selector: str, description: str) -> str:
        """Return the trimmed inner text of the first match.

        Raises:
            MissingElementException: If nothing matches.
        """
        ...

    async def read_int(self, selector: str, description: str) -> int:
        """Return the first match's trimmed inner text parsed as an integer.

        Raises:
            MissingElementException: If nothing matches.
            VoteCountParseException: If the text is not an integer.
        """
        ...

    async def query_all(self, selector: str) -> list[BoardNode]:
        """Return every match in document order (possibly empty)."""
        ...


class BoardSession(Protocol):
    """Loads board pages and waits for them to render."""

    async def load_page(self, url: str) -> BoardNode:
        """Navigate to url and return the page node.

        Raises:
            NavigationException: If the page cannot be reached.
        """
        ...

    async def wait_for_selector(self, page: BoardNode, selector: str) -> None:
        """Block until selector matches on page.

        Raises:
            SelectorTimeoutException: If it does not appear in time.
        """
        ...


def parse_vote_count(raw: str, selector: str, url: str) -> int:
    """Parse trimmed vote text as a base-10 integer.

    Raises:
        VoteCountParseException: If the text is not an integer.
    """
    text = raw.strip()
    if not _INTEGER_RE.match(text):
        raise VoteCountParseException(text, selector, url)
    return int(text)

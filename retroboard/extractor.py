"""Board extraction from a rendered page.

Every browser call is awaited in strict sequence: the page load, the board
title, then each column fully (header, message list, then each message's
text and vote count) before the next column begins.
"""

from __future__ import annotations

import logging

from retroboard.common.exceptions import MissingElementException
from retroboard.common.page import BoardNode, BoardSession
from retroboard.data_types import Board, BoardSelectors, Column, Message

logger = logging.getLogger(__name__)


async def extract_board(
    session: BoardSession,
    url: str,
    selectors: BoardSelectors | None = None,
) -> Board:
    """Load url and read the whole board.

    Args:
        session: Browser session used to load and query the page.
        url: Validated board URL.
        selectors: CSS selectors for board content (default: BoardSelectors()).

    Returns:
        The extracted Board.

    Raises:
        NavigationException: If the page cannot be reached.
        SelectorTimeoutException: If the columns never render.
        MissingElementException: If the title, a column header, or a
            message part is missing, or the board title is empty.
        VoteCountParseException: If a vote count is not an integer.
    """
    selectors = selectors or BoardSelectors()

    page = await session.load_page(url)
    await session.wait_for_selector(page, selectors.column)

    title = await page.read_text(selectors.board_title, "board title")
    if not title:
        raise MissingElementException(
            selectors.board_title, "board title", url
        )
    logger.info(f"Found board '{title}'")

    columns = []
    for column_node in await page.query_all(selectors.column):
        columns.append(await _extract_column(column_node, selectors))

    logger.info(
        f"Extracted {len(columns)} columns with "
        f"{sum(len(c.messages) for c in columns)} messages"
    )
    return Board(title=title, columns=tuple(columns))


async def _extract_column(
    column_node: BoardNode, selectors: BoardSelectors
) -> Column:
    column_title = await column_node.read_text(
        selectors.column_title, "column header"
    )

    messages = []
    for message_node in await column_node.query_all(selectors.message):
        text = await message_node.read_text(
            selectors.message_text, "message text"
        )
        votes = await message_node.read_int(
            selectors.vote_count, "vote count"
        )
        messages.append(Message(text=text, votes=votes))

    logger.debug(f"Column '{column_title}': {len(messages)} messages")
    return Column(title=column_title, messages=tuple(messages))

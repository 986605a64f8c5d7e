"""Test utilities for exercising extraction without a browser.

StaticBoardSession implements the BoardSession protocol over static HTML
parsed with lxml, so extraction and the pipeline can be tested without
launching Playwright.
"""

import socket
from collections.abc import AsyncIterator, Callable
from contextlib import (
    AbstractAsyncContextManager,
    asynccontextmanager,
    closing,
)

from lxml import html
from lxml.html import HtmlElement
from playwright.async_api import Error as PlaywrightError

from retroboard.common.config import ExportConfig
from retroboard.common.exceptions import (
    MissingElementException,
    NavigationException,
    SelectorTimeoutException,
)
from retroboard.common.page import parse_vote_count

BOARD_URL = "https://retro.example.com/board/sprint-42"


def find_free_port() -> int:
    """Find a free port on localhost."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


class StaticNode:
    """BoardNode backed by an lxml element."""

    def __init__(self, element: HtmlElement, url: str) -> None:
        self._element = element
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    async def read_text(self, selector: str, description: str) -> str:
        matches = self._element.cssselect(selector)
        if not matches:
            raise MissingElementException(selector, description, self._url)
        return matches[0].text_content().strip()

    async def read_int(self, selector: str, description: str) -> int:
        text = await self.read_text(selector, description)
        return parse_vote_count(text, selector, self._url)

    async def query_all(self, selector: str) -> list["StaticNode"]:
        return [
            StaticNode(element, self._url)
            for element in self._element.cssselect(selector)
        ]


class StaticBoardSession:
    """BoardSession serving pre-rendered HTML keyed by URL.

    Records every call so tests can assert on ordering.

    Args:
        pages: Mapping of URL to page HTML. Unknown URLs fail to navigate.
    """

    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.calls: list[tuple[str, str]] = []

    async def load_page(self, url: str) -> StaticNode:
        self.calls.append(("load_page", url))
        if url not in self.pages:
            raise NavigationException("Could not load page: not found", url)
        return StaticNode(html.fromstring(self.pages[url]), url)

    async def wait_for_selector(self, page: StaticNode, selector: str) -> None:
        self.calls.append(("wait_for_selector", selector))
        if not await page.query_all(selector):
            raise SelectorTimeoutException(selector, 0, page.url)


def static_session_factory(
    pages: dict[str, str],
) -> tuple[
    Callable[[ExportConfig], AbstractAsyncContextManager[StaticBoardSession]],
    list[ExportConfig],
]:
    """Create a session factory for run_export serving pages.

    Returns:
        A tuple of (factory, configs). configs records the ExportConfig of
        every session opened, so tests can check whether one was opened.

    Example:
        factory, opened = static_session_factory({URL: board_html})
        await run_export(URL, "csv", config, session_factory=factory)
        assert len(opened) == 1
    """
    opened: list[ExportConfig] = []

    @asynccontextmanager
    async def factory(config: ExportConfig) -> AsyncIterator[StaticBoardSession]:
        opened.append(config)
        yield StaticBoardSession(pages)

    return factory, opened


class FailingBrowserType:
    """Stand-in for a Playwright BrowserType whose executable is missing."""

    async def launch(self, headless: bool = True) -> None:
        raise PlaywrightError(
            "BrowserType.launch: Executable doesn't exist at /nowhere/chrome"
        )


class FakePlaywright:
    """Stand-in for a started Playwright instance that cannot launch."""

    def __init__(self) -> None:
        self.chromium = FailingBrowserType()
        self.stopped = False

    async def stop(self) -> None:
        self.stopped = True


class FakePlaywrightStarter:
    """Stand-in for async_playwright() returning a FakePlaywright."""

    def __init__(self, playwright: FakePlaywright) -> None:
        self.playwright = playwright

    async def start(self) -> FakePlaywright:
        return self.playwright


class FailingHandle:
    """Stand-in for a Page or ElementHandle whose DOM calls all fail.

    Records the keyword arguments passed to wait_for_selector.
    """

    def __init__(self, error: PlaywrightError) -> None:
        self.error = error
        self.wait_kwargs: dict[str, object] = {}

    async def query_selector(self, selector: str) -> None:
        raise self.error

    async def query_selector_all(self, selector: str) -> None:
        raise self.error

    async def wait_for_selector(self, selector: str, **kwargs: object) -> None:
        self.wait_kwargs = kwargs
        raise self.error

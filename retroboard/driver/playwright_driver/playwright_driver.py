"""Playwright implementation of the board session protocols.

PlaywrightSession owns the browser lifecycle and is opened as an async
context manager. PlaywrightNode wraps either the Page or an ElementHandle
and implements BoardNode on top of query_selector and inner_text.

Playwright errors are translated into the retroboard exception hierarchy
at this boundary; nothing above it sees a Playwright exception.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from playwright.async_api import (
    Browser,
    BrowserContext,
    ElementHandle,
    Page,
    async_playwright,
)
from playwright.async_api import (
    Error as PlaywrightError,
)
from playwright.async_api import (
    TimeoutError as PlaywrightTimeoutError,
)


from retroboard.common.exceptions import (
    BrowserException,
    MissingElementException,
    NavigationException,
    SelectorTimeoutException,
)
from retroboard.common.page import parse_vote_count

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


class PlaywrightNode:
    """BoardNode backed by a Playwright Page or ElementHandle.

    Args:
        handle: The Page (document root) or ElementHandle to query under.
        url: URL of the owning page, for error reporting.
    """

    def __init__(self, handle: Page | ElementHandle, url: str) -> None:
        self.handle = handle
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def _browser_error(
        self, error: PlaywrightError, selector: str
    ) -> BrowserException:
        return BrowserException(
            f"Browser failed reading '{selector}': {error.message}",
            self._url,
            {"selector": selector},
        )

    async def read_text(self, selector: str, description: str) -> str:
        try:
            element = await self.handle.query_selector(selector)
            if element is None:
                raise MissingElementException(selector, description, self._url)
            text = await element.inner_text()
        except PlaywrightError as e:
            raise self._browser_error(e, selector) from e
        return text.strip()

    async def read_int(self, selector: str, description: str) -> int:
        text = await self.read_text(selector, description)
        return parse_vote_count(text, selector, self._url)

    async def query_all(self, selector: str) -> list[PlaywrightNode]:
        try:
            elements = await self.handle.query_selector_all(selector)
        except PlaywrightError as e:
            raise self._browser_error(e, selector) from e
        return [PlaywrightNode(element, self._url) for element in elements]


class PlaywrightSession:
    """Board session driving a Playwright browser context.

    Use PlaywrightSession.open() rather than constructing directly.

    Args:
        browser_context: The browser context pages are opened in.
        timeout_ms: Timeout for navigation and selector waits.
    """

    def __init__(
        self, browser_context: BrowserContext, timeout_ms: int = 30_000
    ) -> None:
        self.browser_context = browser_context
        self.timeout_ms = timeout_ms
        self._page: Page | None = None

    @classmethod
    @asynccontextmanager
    async def open(
        cls,
        browser_type: str = "chromium",
        headless: bool = True,
        timeout_ms: int = 30_000,
    ) -> AsyncIterator[PlaywrightSession]:
        """Open a session as an async context manager.

        Starts Playwright, launches the browser and creates a context; all
        three are torn down on exit, including when the body raises.

        Args:
            browser_type: "chromium", "firefox" or "webkit".
            headless: Run the browser in headless mode (default: True).
            timeout_ms: Timeout for navigation and selector waits.

        Yields:
            The open session.

        Raises:
            BrowserException: If Playwright or the browser cannot start.

        Example:
            async with PlaywrightSession.open(timeout_ms=10_000) as session:
                page = await session.load_page(url)
        """
        try:
            playwright = await async_playwright().start()
        except PlaywrightError as e:
            raise BrowserException(
                f"Could not start Playwright: {e.message}"
            ) from e

        try:
            browser_launcher = getattr(playwright, browser_type)
            logger.debug(f"Launching {browser_type} (headless={headless})")
            try:
                browser: Browser = await browser_launcher.launch(
                    headless=headless
                )
            except PlaywrightError as e:
                raise BrowserException(
                    f"Could not launch {browser_type}: {e.message}",
                    context={"browser_type": browser_type},
                ) from e

            try:
                try:
                    context = await browser.new_context()
                except PlaywrightError as e:
                    raise BrowserException(
                        f"Could not create browser context: {e.message}"
                    ) from e
                context.set_default_timeout(timeout_ms)
                context.set_default_navigation_timeout(timeout_ms)
                session = cls(context, timeout_ms=timeout_ms)
                try:
                    yield session
                finally:
                    await session.close()
                    await context.close()
            finally:
                await browser.close()
        finally:
            await playwright.stop()

    async def load_page(self, url: str) -> PlaywrightNode:
        """Navigate to url in the session's page.

        Raises:
            NavigationException: If navigation fails or times out.
        """
        logger.info(f"Loading {url}")
        try:
            if self._page is None:
                self._page = await self.browser_context.new_page()
            await self._page.goto(url, wait_until="domcontentloaded")
        except PlaywrightError as e:
            raise NavigationException(
                f"Could not load page: {e.message}", url
            ) from e

        return PlaywrightNode(self._page, url)

    async def wait_for_selector(
        self, page: PlaywrightNode, selector: str
    ) -> None:
        """Wait until selector is visible on the page.

        Raises:
            SelectorTimeoutException: If it does not appear within timeout_ms.
            BrowserException: If the wait fails for any other reason.
        """
        try:
            await page.handle.wait_for_selector(
                selector, timeout=self.timeout_ms
            )
        except PlaywrightTimeoutError as e:
            raise SelectorTimeoutException(
                selector, self.timeout_ms, page.url
            ) from e
        except PlaywrightError as e:
            raise BrowserException(
                f"Waiting for '{selector}' failed: {e.message}",
                page.url,
                {"selector": selector},
            ) from e

    async def close(self) -> None:
        """Close the session's page if one was opened."""
        if self._page:
            await self._page.close()
            self._page = None

"""Playwright-based browser session for rendering retrospective boards.

Boards are rendered client-side, so extraction drives a real browser and
reads text from live element handles.
"""

from retroboard.driver.playwright_driver.playwright_driver import (
    PlaywrightNode,
    PlaywrightSession,
)

__all__ = ["PlaywrightNode", "PlaywrightSession"]

"""Shared fixtures for retroboard tests."""

import asyncio
import threading
from collections.abc import Generator
from pathlib import Path

import pytest
from aiohttp import web

from retroboard.common.config import ExportConfig
from tests.mock_server import (
    SPRINT_RETRO,
    SPRINT_RETRO_TITLE,
    MockColumn,
    MockMessage,
    create_app,
    generate_board_html,
)
from tests.utils import find_free_port


@pytest.fixture
def board_html() -> str:
    """HTML for the Sprint Retro board."""
    return generate_board_html(SPRINT_RETRO_TITLE, SPRINT_RETRO)


@pytest.fixture
def single_message_html() -> str:
    """A board with one column holding one five-vote message."""
    return generate_board_html(
        "Sprint Retro",
        [MockColumn("Went Well", [MockMessage("Good pace", 5)])],
    )


@pytest.fixture
def export_config(tmp_path: Path) -> ExportConfig:
    """Export configuration writing into a temporary directory."""
    return ExportConfig(output_dir=tmp_path, timeout_ms=5_000)


# =============================================================================
# aiohttp test server fixtures
# =============================================================================


class AioHttpTestServer:
    """Wrapper to run aiohttp server in a background thread."""

    def __init__(self, app: web.Application, port: int) -> None:
        self.app = app
        self.port = port
        self.host = "127.0.0.1"
        self._loop: asyncio.AbstractEventLoop | None = None
        self._runner: web.AppRunner | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()

    @property
    def url(self) -> str:
        """Get the base URL of the server."""
        return f"http://{self.host}:{self.port}"

    def start(self) -> None:
        """Start the server in a background thread."""
        self._thread = threading.Thread(target=self._run_server, daemon=True)
        self._thread.start()
        self._started.wait(timeout=5.0)

    def _run_server(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)

        async def start() -> None:
            self._runner = web.AppRunner(self.app)
            await self._runner.setup()
            site = web.TCPSite(self._runner, self.host, self.port)
            await site.start()

        self._loop.run_until_complete(start())
        self._started.set()
        self._loop.run_forever()

    def stop(self) -> None:
        """Stop the server and clean up resources."""
        if self._loop and self._runner:
            runner = self._runner
            future = asyncio.run_coroutine_threadsafe(
                runner.cleanup(), self._loop
            )
            future.result(timeout=2.0)

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread:
            self._thread.join(timeout=2.0)


@pytest.fixture
def board_server() -> Generator[AioHttpTestServer, None, None]:
    """Start an aiohttp server serving the mock boards.

    Yields:
        AioHttpTestServer instance with the mock board app running.
    """
    server = AioHttpTestServer(create_app(), find_free_port())
    server.start()
    yield server
    server.stop()


@pytest.fixture
def server_url(board_server: AioHttpTestServer) -> str:
    """Base URL of the mock board server (e.g. "http://127.0.0.1:8080")."""
    return board_server.url

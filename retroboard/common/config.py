"""Run configuration for board export.

ExportConfig is built by the CLI from its options. There are no
environment variables and no config file; defaults cover everything.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from retroboard.data_types import BoardSelectors


class ExportConfig(BaseModel):
    """Settings for one export run.

    Attributes:
        browser_type: Playwright browser to launch.
        headless: Run the browser without a window.
        timeout_ms: Upper bound for navigation and for the board to render.
        output_dir: Directory the export file is written to.
        selectors: CSS selectors locating board content.
    """

    model_config = ConfigDict(frozen=True)

    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    timeout_ms: int = Field(default=30_000, gt=0)
    output_dir: Path = Field(default_factory=Path.cwd)
    selectors: BoardSelectors = Field(default_factory=BoardSelectors)

"""Exception types for board export errors.

Every failure in an export run is terminal. The hierarchy mirrors the
stages of the pipeline: argument validation happens before a browser is
launched, the browser errors come from page extraction, and
ExportWriteException comes from persisting the shaped output.
"""

from pathlib import Path
from typing import Any


class RetroboardException(Exception):
    """Base class for every error raised during an export run.

    Carries the board URL (when known) and a dict of additional context
    that is rendered below the message, one key per line.
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the failure.
            url: The board URL being exported, if known.
            context: Optional dict of additional context (selector, value, etc).
        """
        self.message = message
        self.url = url
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context.

        Returns:
            Formatted error message string.
        """
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


class ArgumentValidationException(RetroboardException):
    """Raised when a command-line argument fails validation.

    Raised before any network activity, so no browser is ever launched for
    a run that fails here.

    Attributes:
        argument: Name of the offending argument ("url" or "extension").
        value: The raw value that was rejected (None when missing).
    """

    def __init__(self, argument: str, value: str | None, reason: str) -> None:
        self.argument = argument
        self.value = value
        super().__init__(
            reason, context={"argument": argument, "value": repr(value)}
        )


class NavigationException(RetroboardException):
    """Raised when the board page cannot be reached."""


class BrowserException(RetroboardException):
    """Raised when the browser itself fails.

    Covers launching the browser and DOM reads that fail for reasons other
    than a missing element, such as a node detached mid-read.
    """


class SelectorTimeoutException(RetroboardException):
    """Raised when the board container does not render in time.

    Attributes:
        selector: The CSS selector that was awaited.
        timeout_ms: The timeout that elapsed, in milliseconds.
    """

    def __init__(self, selector: str, timeout_ms: int, url: str) -> None:
        self.selector = selector
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Timed out after {timeout_ms}ms waiting for '{selector}'",
            url,
            {"selector": selector, "timeout_ms": timeout_ms},
        )


class MissingElementException(RetroboardException):
    """Raised when an expected element is absent or has no text.

    Attributes:
        selector: The CSS selector that found nothing.
        description: Human-readable description of what was being read.
    """

    def __init__(self, selector: str, description: str, url: str) -> None:
        self.selector = selector
        self.description = description
        super().__init__(
            f"Missing element for '{description}'",
            url,
            {"selector": selector},
        )


class VoteCountParseException(RetroboardException):
    """Raised when a vote count element does not hold an integer.

    Attributes:
        raw_text: The trimmed text that failed to parse.
        selector: The CSS selector the text was read from.
    """

    def __init__(self, raw_text: str, selector: str, url: str) -> None:
        self.raw_text = raw_text
        self.selector = selector
        super().__init__(
            f"Vote count is not an integer: {raw_text!r}",
            url,
            {"selector": selector},
        )


class ExportWriteException(RetroboardException):
    """Raised when the output file cannot be written.

    Attributes:
        path: The resolved output path.
    """

    def __init__(self, path: Path, error: OSError | str) -> None:
        self.path = path
        super().__init__(
            f"Could not write export file: {error}",
            context={"path": str(path)},
        )

"""Command-line argument validation.

Both arguments are checked before any browser is launched. URLs are parsed
into components rather than matched against a pattern, so the error names
the part that is wrong.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from retroboard.common.exceptions import ArgumentValidationException
from retroboard.data_types import ExportFormat

ALLOWED_SCHEMES = frozenset({"http", "https", "ftp", "file"})


def validate_url(raw: str | None) -> str:
    """Validate the board URL.

    The scheme must be one of http, https, ftp or file (any casing) and
    be followed by "//". Network schemes need a host; file URLs need a
    path. The URL is returned as given, without normalization.

    Args:
        raw: The URL argument, or None if it was not supplied.

    Returns:
        The validated URL.

    Raises:
        ArgumentValidationException: If the URL is missing or malformed.
    """
    if raw is None or not raw.strip():
        raise ArgumentValidationException(
            "url", raw, "Please provide a valid URL as the first argument."
        )

    try:
        parts = urlsplit(raw)
        # Accessing .port validates the authority's port component.
        _ = parts.port
    except ValueError as e:
        raise ArgumentValidationException(
            "url", raw, f"URL could not be parsed: {e}"
        ) from e

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        allowed = ", ".join(sorted(ALLOWED_SCHEMES))
        raise ArgumentValidationException(
            "url",
            raw,
            f"Unsupported URL scheme '{parts.scheme}' (expected one of: {allowed}).",
        )

    if not raw.lstrip()[len(parts.scheme) + 1 :].startswith("//"):
        raise ArgumentValidationException(
            "url", raw, f"URL must include '//' after '{parts.scheme}:'."
        )

    if scheme == "file":
        if not parts.path or parts.path == "/":
            raise ArgumentValidationException(
                "url", raw, "File URLs must include a path."
            )
    elif not parts.hostname:
        raise ArgumentValidationException(
            "url", raw, f"{scheme.upper()} URLs must include a host."
        )

    return raw


def validate_extension(raw: str | None) -> ExportFormat:
    """Validate the output extension (``csv`` or ``txt``, any casing).

    Raises:
        ArgumentValidationException: If the extension is missing or unsupported.
    """
    normalized = raw.lower() if raw else ""
    for export_format in ExportFormat:
        if normalized == export_format.extension:
            return export_format

    raise ArgumentValidationException(
        "extension",
        raw,
        "Please provide a filetype you want to use (CSV or TXT) "
        "as the second argument.",
    )


def validate_arguments(
    url: str | None, extension: str | None
) -> tuple[str, ExportFormat]:
    """Validate both CLI arguments, URL first."""
    return validate_url(url), validate_extension(extension)

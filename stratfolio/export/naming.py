"""
Output file names and archive entry paths.

Free-text names (portfolio and file names) and instrument identifiers are
reduced to filesystem-safe tokens before they are used in output names or
archive paths. Every archive entry gets a fresh random id so entries never
collide.
"""

import logging
import re
import uuid
from datetime import datetime


logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-z0-9\-_]", re.IGNORECASE)
_UNSAFE_SEGMENT_CHARS = re.compile(r"[^A-Za-z0-9._\-]")


def sanitize_file_name(name: str, fallback: str = "export") -> str:
    """
    Reduce a free-text name to lowercase ``[a-z0-9_-]``.

    Args:
        name: Free-text name, e.g. a portfolio name.
        fallback: Token used when the name is empty.

    Returns:
        Sanitized token.

    Examples:
        >>> sanitize_file_name("My Portfolio #1")
        'my_portfolio__1'
        >>> sanitize_file_name("")
        'export'
    """
    token = _UNSAFE_NAME_CHARS.sub("_", name).lower()
    return token or fallback


def sanitize_path_segment(segment: str) -> str:
    """
    Make a symbol or timeframe safe to use as one archive path segment.

    Case is kept; characters outside ``[A-Za-z0-9._-]`` become ``_`` and the
    relative segments ``.`` and ``..`` are replaced.

    Examples:
        >>> sanitize_path_segment("EUR/USD")
        'EUR_USD'
        >>> sanitize_path_segment("..")
        '__'
    """
    token = _UNSAFE_SEGMENT_CHARS.sub("_", segment)
    if token in ("", ".", ".."):
        token = "_" * max(len(token), 1)
    return token


def generate_entry_id() -> str:
    """Return a random UUID4 string for one archive entry."""
    return str(uuid.uuid4())


def _date_tag(timestamp: datetime) -> str:
    return timestamp.strftime("%Y-%m-%d")


def archive_file_name(name: str, timestamp: datetime) -> str:
    """
    Generate the download name of an archive.

    Examples:
        >>> from datetime import datetime, timezone
        >>> archive_file_name("Core FX", datetime(2025, 3, 1, tzinfo=timezone.utc))
        'core_fx-2025-03-01.zip'
    """
    filename = f"{sanitize_file_name(name)}-{_date_tag(timestamp)}.zip"
    logger.debug("Generated archive filename: %s", filename)
    return filename


def stats_file_name(name: str, timestamp: datetime) -> str:
    """
    Generate the download name of a tabular summary.

    Examples:
        >>> from datetime import datetime, timezone
        >>> stats_file_name("Core FX", datetime(2025, 3, 1, tzinfo=timezone.utc))
        'core_fx-stats-2025-03-01.csv'
    """
    filename = f"{sanitize_file_name(name)}-stats-{_date_tag(timestamp)}.csv"
    logger.debug("Generated summary filename: %s", filename)
    return filename

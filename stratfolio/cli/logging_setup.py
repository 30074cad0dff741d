"""
Logging configuration for stratfolio commands.

Terminal output goes to stderr so command reports on stdout stay clean:
through Rich when stderr is interactive, as plain timestamped lines
otherwise. A log file can be added in text or JSON-lines form.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


PLAIN_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _terminal_handler() -> logging.Handler:
    if sys.stderr.isatty():
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt=f"[{DATE_FORMAT}]"))
        return handler

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(log_file: Path, use_json: bool) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    use_json: bool = False,
) -> None:
    """
    Replace the root logger's handlers with stratfolio's terminal and file handlers.

    Args:
        level: Logging level name ("DEBUG", "INFO", "WARNING", "ERROR");
            unknown names fall back to INFO.
        log_file: Optional file that also receives every record.
        use_json: Write the log file as JSON lines instead of text.

    Examples:
        >>> from pathlib import Path
        >>> setup_logging("DEBUG", log_file=Path("logs/analyze.log"))  # doctest: +SKIP
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers = [_terminal_handler()]
    if log_file:
        handlers.append(_file_handler(log_file, use_json))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    for handler in handlers:
        handler.setLevel(numeric_level)
        root_logger.addHandler(handler)

    root_logger.debug(
        "Logging configured: level=%s, file=%s, json=%s",
        logging.getLevelName(numeric_level),
        log_file,
        use_json,
    )


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record: UTC timestamp, level, logger and message.

    A ``source`` attribute passed through ``extra=`` (the upload a record
    refers to) and exception text are included when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        source = getattr(record, "source", None)
        if source is not None:
            entry["source"] = source

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)

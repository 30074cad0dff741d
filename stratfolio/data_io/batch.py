"""
Batch ingestion of multiple uploads.

Each upload is normalized independently; a failing file is skipped and its
error collected instead of aborting the batch. The batch fails only when no
file produced a single valid strategy.

Files may be normalized concurrently. Results and errors are keyed by file
name and reported in input order regardless of completion order.
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from stratfolio.config.settings import DEFAULT_SETTINGS, AnalyzerSettings
from stratfolio.data_io.ingestion import UploadedFile, UploadFile, parse_upload
from stratfolio.models.exceptions import BatchIngestionError, ValidationError
from stratfolio.models.strategy import Strategy


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileError:
    """
    Collected failure of one upload in a batch.

    Attributes:
        source: File name of the failed upload.
        message: Human-readable cause.
    """

    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of a batch ingestion.

    Attributes:
        uploads: Successfully normalized uploads, in input order.
        errors: Collected per-file failures, in input order.
    """

    uploads: tuple[UploadedFile, ...] = ()
    errors: tuple[FileError, ...] = ()

    @property
    def strategies(self) -> list[Strategy]:
        """All normalized strategies across uploads."""
        return [s for upload in self.uploads for s in upload.strategies]

    @property
    def completed(self) -> int:
        """Number of files processed, successful or not."""
        return len(self.uploads) + len(self.errors)


def _normalize_one(
    upload: UploadFile, settings: AnalyzerSettings
) -> UploadedFile | FileError:
    try:
        return parse_upload(upload, settings)
    except ValidationError as exc:
        logger.warning(
            "Skipping upload %s: %s", upload.name, exc, extra={"source": upload.name}
        )
        return FileError(source=upload.name, message=str(exc))


def normalize_batch(
    files: Iterable[UploadFile],
    settings: AnalyzerSettings = DEFAULT_SETTINGS,
    max_workers: int | None = None,
) -> BatchResult:
    """
    Normalize several uploads, collecting per-file errors.

    Args:
        files: Uploads to normalize.
        settings: Limits to apply to every upload.
        max_workers: Concurrent normalizations (default: settings.max_workers).

    Returns:
        BatchResult with successful uploads and collected errors.

    Raises:
        BatchIngestionError: If errors were collected and no strategy
            record was produced.

    Examples:
        >>> result = normalize_batch([UploadFile("a.json", b"{}")])  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        BatchIngestionError: Failed to parse any files:
        Missing or invalid dataId in a.json[0]
    """
    uploads = list(files)
    workers = max_workers if max_workers is not None else settings.max_workers

    if workers > 1 and len(uploads) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(uploads))) as executor:
            outcomes = list(executor.map(lambda u: _normalize_one(u, settings), uploads))
    else:
        outcomes = [_normalize_one(upload, settings) for upload in uploads]

    result = BatchResult(
        uploads=tuple(o for o in outcomes if isinstance(o, UploadedFile)),
        errors=tuple(o for o in outcomes if isinstance(o, FileError)),
    )

    if result.errors and not result.strategies:
        raise BatchIngestionError([error.message for error in result.errors])

    logger.info(
        "Batch ingestion complete: %d/%d files, %d strategies, %d errors",
        len(result.uploads),
        len(uploads),
        len(result.strategies),
        len(result.errors),
    )

    return result

"""
Selection stage - check newly selected files against configured limits.
"""

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field

from upload_dashboard.domain.exceptions import ValidationError
from upload_dashboard.domain.models.config import UploadLimits
from upload_dashboard.domain.models.files import PendingFile

logger = logging.getLogger(__name__)


@dataclass
class RejectedFile:
    """A file refused by the selection stage"""
    file: PendingFile
    reason: str


@dataclass
class SelectionResult:
    """Files accepted into the queue and files refused"""
    accepted: list[PendingFile] = field(default_factory=list)
    rejected: list[RejectedFile] = field(default_factory=list)
    # Background image decodes started for accepted files
    pending_previews: list[Future] = field(default_factory=list)

    def has_rejections(self) -> bool:
        return len(self.rejected) > 0


def check_file(file: PendingFile, limits: UploadLimits) -> None:
    """
    Validate a single file against per-file limits.

    Raises:
        ValidationError: If the file breaks a limit
    """
    if limits.max_file_size_bytes is not None and file.size > limits.max_file_size_bytes:
        raise ValidationError(
            f"{file.name} exceeds {limits.max_file_size_bytes} bytes",
            field="size",
            value=file.size
        )

    if not limits.allows_content_type(file.content_type):
        raise ValidationError(
            f"{file.name} has unsupported type '{file.content_type or 'unknown'}'",
            field="content_type",
            value=file.content_type
        )


def validate_selection(
    files: list[PendingFile],
    limits: UploadLimits,
    already_queued: int = 0
) -> SelectionResult:
    """
    Split a selection into accepted and rejected files.

    With default (unlimited) limits every file is accepted, duplicates
    included.

    Args:
        files: Newly selected files, in selection order
        limits: Configured limits
        already_queued: Number of files already in the queue

    Returns:
        SelectionResult
    """
    result = SelectionResult()
    if limits.is_unlimited():
        result.accepted.extend(files)
        return result

    queued = already_queued
    for file in files:
        if limits.max_files is not None and queued >= limits.max_files:
            result.rejected.append(
                RejectedFile(file, f"queue limit of {limits.max_files} files reached")
            )
            continue

        try:
            check_file(file, limits)
        except ValidationError as e:
            result.rejected.append(RejectedFile(file, e.message))
            continue

        result.accepted.append(file)
        queued += 1

    for rejected in result.rejected:
        logger.warning(f"Rejected {rejected.file.name}: {rejected.reason}")

    return result

"""
Core file domain models.

These models represent the files moving through the dashboard and are
framework-agnostic.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PendingFile:
    """
    A file selected or dropped by the user, not yet uploaded.

    Compared by identity: selecting the same bytes twice queues two files.
    """
    name: str
    data: bytes
    content_type: str = ""

    @property
    def size(self) -> int:
        """Size of the payload in bytes"""
        return len(self.data)

    def is_image(self) -> bool:
        """Check if declared type is an image"""
        return self.content_type.startswith("image")

    def is_pdf(self) -> bool:
        """Check if declared type is exactly PDF"""
        return self.content_type == "application/pdf"

    def __repr__(self) -> str:
        return (
            f"PendingFile(name='{self.name}', "
            f"type='{self.content_type}', size={self.size})"
        )


class PreviewKind(Enum):
    """What a preview payload holds"""
    INLINE = "inline"  # data: URL with encoded bytes
    ICON = "icon"  # fixed icon reference
    NONE = "none"


@dataclass(frozen=True)
class FilePreview:
    """Lightweight visual representation of a pending file"""
    file: PendingFile
    kind: PreviewKind
    payload: str | None = None

    @classmethod
    def none(cls, file: PendingFile) -> "FilePreview":
        return cls(file=file, kind=PreviewKind.NONE)


@dataclass(frozen=True)
class RemoteFileRecord:
    """
    A file as reported by the remote file-storage service.

    The service owns this data; the dashboard only reads it.
    """
    filename: str
    path: str
    uploaded_at: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RemoteFileRecord":
        """Build a record from the service's JSON representation"""
        return cls(
            filename=str(data.get("filename", "")),
            path=str(data.get("path", "")),
            uploaded_at=str(data.get("uploadedAt", "")),
        )

    def uploaded_at_datetime(self) -> datetime | None:
        """
        Parse the ISO-8601 upload timestamp.

        Returns:
            Parsed datetime (aware if the string carries an offset),
            or None if the timestamp cannot be parsed
        """
        raw = self.uploaded_at.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            logger.debug(f"Unparseable uploadedAt for {self.filename}: {self.uploaded_at!r}")
            return None

    def to_dict(self) -> dict[str, str]:
        """Convert to the service's JSON representation"""
        return {
            "filename": self.filename,
            "path": self.path,
            "uploadedAt": self.uploaded_at,
        }

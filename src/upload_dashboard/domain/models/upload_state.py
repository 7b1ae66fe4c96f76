"""
Upload state - explicit state struct for the upload pipeline.

Replaces scattered component fields with one typed structure whose
methods are the pipeline's transitions.
"""

from dataclasses import dataclass, field
from enum import Enum

from .files import PendingFile, FilePreview, RemoteFileRecord


class PipelineStatus(Enum):
    """Pipeline lifecycle states"""
    IDLE = "idle"
    UPLOADING = "uploading"
    ADVANCING = "advancing"
    COMPLETED = "completed"


class EventKind(Enum):
    """Discrete state changes emitted by the pipeline"""
    FILES_SELECTED = "files_selected"
    FILES_REJECTED = "files_rejected"
    PREVIEW_ADDED = "preview_added"
    UPLOAD_STARTED = "upload_started"
    FILE_STARTED = "file_started"
    PROGRESS = "progress"
    FILE_UPLOADED = "file_uploaded"
    FILE_FAILED = "file_failed"
    COMPLETED = "completed"
    REMOTE_FILES_REFRESHED = "remote_files_refreshed"
    FETCH_FAILED = "fetch_failed"
    RESET = "reset"


@dataclass
class UploadState:
    """
    Complete state of the dashboard.

    Transient fields (queue, previews, progress, uploading, current_index)
    are cleared by reset(). uploaded_file_names and remote_files survive it.
    """
    queue: list[PendingFile] = field(default_factory=list)
    previews: list[FilePreview] = field(default_factory=list)
    progress: dict[str, int] = field(default_factory=dict)
    uploading: bool = False
    current_index: int = -1
    status: PipelineStatus = PipelineStatus.IDLE

    # Names reported by the service for the most recent run
    uploaded_file_names: list[str] = field(default_factory=list)

    # Today's files, recomputed on every fetch
    remote_files: list[RemoteFileRecord] = field(default_factory=list)

    def enqueue(self, files: list[PendingFile]) -> None:
        """Append files to the pending queue"""
        self.queue.extend(files)

    def is_queued(self, file: PendingFile) -> bool:
        return any(queued is file for queued in self.queue)

    def add_preview(self, preview: FilePreview) -> None:
        self.previews.append(preview)

    def remove_preview(self, file: PendingFile) -> bool:
        """Remove the preview of a file; returns True if one was removed"""
        for i, preview in enumerate(self.previews):
            if preview.file is file:
                del self.previews[i]
                return True
        return False

    def start(self) -> None:
        """Mark an upload run as started"""
        self.uploading = True
        self.status = PipelineStatus.UPLOADING
        self.uploaded_file_names = []

    def begin_file(self, index: int) -> PendingFile:
        """Enter Uploading(index) and initialise the file's progress entry"""
        file = self.queue[index]
        self.current_index = index
        self.status = PipelineStatus.UPLOADING
        self.progress[file.name] = 0
        return file

    def record_progress(self, file_name: str, percent: int) -> None:
        self.progress[file_name] = percent

    def mark_uploaded(self, file: PendingFile, server_names: list[str]) -> None:
        """Record a successful upload"""
        self.remove_preview(file)
        self.uploaded_file_names.extend(server_names or [file.name])
        self.status = PipelineStatus.ADVANCING

    def mark_failed(self, file: PendingFile) -> None:
        """Record a failed upload; the file stays out of uploaded_file_names"""
        self.remove_preview(file)
        self.status = PipelineStatus.ADVANCING

    def complete(self) -> None:
        self.status = PipelineStatus.COMPLETED

    def reset(self) -> None:
        """Reset transient upload state"""
        self.queue.clear()
        self.previews.clear()
        self.progress.clear()
        self.uploading = False
        self.current_index = -1
        self.status = PipelineStatus.IDLE

    def is_idle(self) -> bool:
        return self.status == PipelineStatus.IDLE and not self.uploading

    @property
    def total_bytes(self) -> int:
        """Total size of queued files"""
        return sum(f.size for f in self.queue)


@dataclass(frozen=True)
class StateEvent:
    """
    A single state change.

    `state` is the live state object, not a copy; subscribers read it
    synchronously during emission.
    """
    kind: EventKind
    state: UploadState
    file_name: str | None = None
    index: int | None = None
    percent: int | None = None
    error: str | None = None


@dataclass
class UploadRunSummary:
    """Outcome of one upload run, by local file name"""
    uploaded: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.uploaded) + len(self.failed)

    def is_successful(self) -> bool:
        return not self.failed

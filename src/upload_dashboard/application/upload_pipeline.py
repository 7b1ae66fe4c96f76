"""
Upload Pipeline - Main orchestrator for the upload dashboard.

Supports:
- File selection with optional limits
- Preview generation (images decoded in the background)
- Strictly sequential single-file uploads with per-file progress
- Continue-on-error: a failed file is logged and skipped
- Refresh of today's remote files after every run
"""

import logging
import math
import threading
from concurrent.futures import Future
from datetime import datetime
from typing import Callable

from upload_dashboard.domain.exceptions import FetchError, PipelineBusyError, UploadError
from upload_dashboard.domain.interfaces.file_service import FileService
from upload_dashboard.domain.models.config import UploadLimits
from upload_dashboard.domain.models.files import FilePreview, PendingFile, RemoteFileRecord
from upload_dashboard.domain.models.upload_state import (
    EventKind,
    StateEvent,
    UploadRunSummary,
    UploadState,
)

from .preview_generator import PreviewGenerator
from .selection import SelectionResult, validate_selection
from .state_channel import StateChannel, Subscriber
from .today_filter import filter_files_uploaded_today

logger = logging.getLogger(__name__)


def progress_percent(loaded: int, total: int) -> int:
    """Integer percentage, rounded half up and clamped to [0, 100]"""
    percent = math.floor(100 * loaded / total + 0.5)
    return max(0, min(100, percent))


class UploadPipeline:
    """
    Sequential upload pipeline with per-file progress tracking.

    Responsibilities:
    - Own the UploadState and apply every transition to it
    - Emit a StateEvent on the channel after each transition
    - Upload one file at a time; the next request starts only after the
      current one succeeded or failed
    """

    def __init__(
        self,
        file_service: FileService,
        preview_generator: PreviewGenerator,
        limits: UploadLimits | None = None,
        clock: Callable[[], datetime] = datetime.now,
        channel: StateChannel | None = None
    ):
        """
        Initialize upload pipeline.

        Args:
            file_service: Remote file-storage service
            preview_generator: Builds previews for selected files
            limits: Selection limits (default: none)
            clock: Source of "now" for the today filter
            channel: Event channel (a new one is created if omitted)
        """
        self.file_service = file_service
        self.preview_generator = preview_generator
        self.limits = limits or UploadLimits()
        self.clock = clock
        self.channel = channel or StateChannel()

        self._state = UploadState()
        self._lock = threading.RLock()
        # Files whose upload reached a terminal event in the current run
        self._consumed: set[int] = set()

        logger.info(
            f"UploadPipeline initialized "
            f"(limits={'none' if self.limits.is_unlimited() else self.limits.model_dump()})"
        )

    @property
    def state(self) -> UploadState:
        """Current state (live object)"""
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Subscribe to state events; returns an unsubscribe function"""
        return self.channel.subscribe(callback)

    # === SELECTION & PREVIEW ===

    def select_files(self, files: list[PendingFile]) -> SelectionResult:
        """
        Append files to the pending queue and start their previews.

        Duplicates are not removed. Files breaking a configured limit are
        rejected and reported via FILES_REJECTED.

        Args:
            files: Files from the picker or a drag-and-drop, in order

        Returns:
            SelectionResult, with futures of image previews still decoding
        """
        with self._lock:
            result = validate_selection(files, self.limits, len(self._state.queue))

            for rejected in result.rejected:
                self._emit(
                    EventKind.FILES_REJECTED,
                    file_name=rejected.file.name,
                    error=rejected.reason
                )

            if result.accepted:
                self._state.enqueue(result.accepted)
                logger.info(
                    f"Queued {len(result.accepted)} files "
                    f"({len(self._state.queue)} pending)"
                )
                self._emit(EventKind.FILES_SELECTED)

        for file in result.accepted:
            future = self.generate_preview(file)
            if future is not None:
                result.pending_previews.append(future)

        return result

    def generate_preview(self, file: PendingFile) -> Future | None:
        """
        Build the preview of a queued file.

        Returns:
            Future for background image decodes, None otherwise
        """
        return self.preview_generator.generate(file, self._on_preview_ready)

    def _on_preview_ready(self, preview: FilePreview) -> None:
        with self._lock:
            file = preview.file
            if not self._state.is_queued(file) or id(file) in self._consumed:
                logger.debug(f"Dropping late preview for {file.name}")
                return

            self._state.add_preview(preview)
            self._emit(EventKind.PREVIEW_ADDED, file_name=file.name)

    # === UPLOAD ===

    def upload_files(self) -> UploadRunSummary:
        """
        Upload every queued file, one at a time.

        No-op on an empty queue. After the last file the remote list is
        refreshed once and all transient state is reset.

        Returns:
            Names of uploaded and failed files

        Raises:
            PipelineBusyError: If a run is already in progress
        """
        summary = UploadRunSummary()

        with self._lock:
            if self._state.uploading:
                raise PipelineBusyError(self._state.current_index)
            if not self._state.queue:
                logger.debug("Upload requested with empty queue")
                return summary

            self._state.start()
            total = len(self._state.queue)
            self._emit(EventKind.UPLOAD_STARTED)

        logger.info(f"Starting upload run: {total} files")

        try:
            index = 0
            while self._upload_next(index, summary):
                index += 1
        except Exception:
            logger.exception("Upload run aborted")
            self.reset()
            raise

        with self._lock:
            self._state.complete()
            self._emit(EventKind.COMPLETED)

        logger.info(
            f"Upload run complete: "
            f"{len(summary.uploaded)}/{summary.total} uploaded, "
            f"{len(summary.failed)} failed"
        )

        self.refresh_remote_files()
        self.reset()
        return summary

    def _upload_next(self, index: int, summary: UploadRunSummary) -> bool:
        """
        Upload the file at `index`.

        Returns:
            False when the queue is exhausted
        """
        with self._lock:
            # Queue length is re-read so files added mid-run are included
            if index >= len(self._state.queue):
                return False
            file = self._state.begin_file(index)
            self._emit(EventKind.FILE_STARTED, file_name=file.name, index=index, percent=0)

        def on_progress(loaded: int, total: int | None) -> None:
            self._on_progress(file, index, loaded, total)

        try:
            server_names = self.file_service.upload(file, on_progress=on_progress)
        except UploadError as e:
            logger.error(f"✗ Upload error for {file.name}: {e}")
            with self._lock:
                self._consumed.add(id(file))
                self._state.mark_failed(file)
                self._emit(EventKind.FILE_FAILED, file_name=file.name, index=index, error=str(e))
            summary.failed.append(file.name)
            return True

        logger.info(f"✓ Uploaded {file.name}")
        with self._lock:
            self._consumed.add(id(file))
            self._state.mark_uploaded(file, server_names)
            self._emit(EventKind.FILE_UPLOADED, file_name=file.name, index=index)
        summary.uploaded.append(file.name)
        return True

    def _on_progress(self, file: PendingFile, index: int, loaded: int, total: int | None) -> None:
        if not total:
            return

        percent = progress_percent(loaded, total)
        with self._lock:
            self._state.record_progress(file.name, percent)
            self._emit(EventKind.PROGRESS, file_name=file.name, index=index, percent=percent)
        logger.debug(f"{file.name}: {percent}% ({loaded}/{total} bytes)")

    # === REMOTE LIST ===

    def refresh_remote_files(self) -> list[RemoteFileRecord]:
        """
        Re-fetch the remote list and keep only today's files.

        On failure the previous list is kept and FETCH_FAILED is emitted.

        Returns:
            Today's files (possibly stale on failure)
        """
        try:
            records = self.file_service.list_files()
        except FetchError as e:
            logger.error(f"Error fetching files: {e}")
            with self._lock:
                self._emit(EventKind.FETCH_FAILED, error=str(e))
                return list(self._state.remote_files)

        today = filter_files_uploaded_today(records, self.clock())
        logger.info(f"Fetched {len(records)} remote files, {len(today)} uploaded today")

        with self._lock:
            self._state.remote_files = today
            self._emit(EventKind.REMOTE_FILES_REFRESHED)
        return today

    # === RESET ===

    def reset(self) -> None:
        """Clear queue, previews, progress and the uploading flag"""
        with self._lock:
            self._state.reset()
            self._consumed.clear()
            self._emit(EventKind.RESET)

    def _emit(self, kind: EventKind, **kwargs) -> None:
        self.channel.emit(StateEvent(kind=kind, state=self._state, **kwargs))

    def get_stats(self) -> dict:
        """Get pipeline statistics"""
        with self._lock:
            return {
                "queued": len(self._state.queue),
                "queued_bytes": self._state.total_bytes,
                "previews": len(self._state.previews),
                "uploading": self._state.uploading,
                "current_index": self._state.current_index,
                "uploaded_last_run": list(self._state.uploaded_file_names),
                "remote_files_today": len(self._state.remote_files),
            }

"""Domain models - Core entities"""

from .files import (
    PendingFile,
    PreviewKind,
    FilePreview,
    RemoteFileRecord,
)
from .upload_state import (
    PipelineStatus,
    EventKind,
    UploadState,
    StateEvent,
    UploadRunSummary,
)
from .config import (
    AppConfig,
    UploadLimits,
    PreviewConfig,
)

__all__ = [
    # File models
    "PendingFile",
    "PreviewKind",
    "FilePreview",
    "RemoteFileRecord",
    # State models
    "PipelineStatus",
    "EventKind",
    "UploadState",
    "StateEvent",
    "UploadRunSummary",
    # Config models
    "AppConfig",
    "UploadLimits",
    "PreviewConfig",
]

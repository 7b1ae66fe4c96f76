"""Application layer - upload pipeline and its collaborators"""

from .upload_pipeline import UploadPipeline, progress_percent
from .preview_generator import PreviewGenerator
from .selection import SelectionResult, RejectedFile, validate_selection
from .state_channel import StateChannel
from .today_filter import filter_files_uploaded_today, day_bounds

__all__ = [
    "UploadPipeline",
    "progress_percent",
    "PreviewGenerator",
    "SelectionResult",
    "RejectedFile",
    "validate_selection",
    "StateChannel",
    "filter_files_uploaded_today",
    "day_bounds",
]

"""Domain interfaces (Ports) - Abstract protocols for external dependencies"""

from .file_service import FileService, ProgressCallback

__all__ = [
    "FileService",
    "ProgressCallback",
]

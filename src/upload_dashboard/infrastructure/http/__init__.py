"""HTTP adapters for the remote file-storage service"""

from .file_service_client import FileServiceClient
from .progress_body import ProgressBody

__all__ = ["FileServiceClient", "ProgressBody"]

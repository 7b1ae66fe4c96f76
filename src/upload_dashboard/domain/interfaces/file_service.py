"""
File Service Protocol - Interface for the remote file-storage service.
"""

from typing import Callable, Protocol

from upload_dashboard.domain.models.files import PendingFile, RemoteFileRecord

# (loaded_bytes, total_bytes or None when unknown)
ProgressCallback = Callable[[int, int | None], None]


class FileService(Protocol):
    """Interface for listing and uploading files"""

    def list_files(self) -> list[RemoteFileRecord]:
        """
        List all files stored by the service.

        Returns:
            Remote file records, unfiltered

        Raises:
            FetchError: If the listing request fails
        """
        ...

    def upload(
        self,
        file: PendingFile,
        on_progress: ProgressCallback | None = None
    ) -> list[str]:
        """
        Upload a single file.

        Args:
            file: File to upload
            on_progress: Called zero or more times with (loaded, total)
                before the request completes

        Returns:
            File names reported by the service

        Raises:
            UploadError: If the upload fails
        """
        ...

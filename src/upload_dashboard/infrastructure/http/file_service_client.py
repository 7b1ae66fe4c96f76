"""
File service client - REST client for the remote file-storage service.
"""

import logging
from typing import Any

import requests
from urllib3 import encode_multipart_formdata
from urllib3.fields import RequestField

from upload_dashboard.domain.exceptions import FetchError, UploadError
from upload_dashboard.domain.interfaces.file_service import ProgressCallback
from upload_dashboard.domain.models.files import PendingFile, RemoteFileRecord
from .progress_body import ProgressBody

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FileServiceClient:
    """
    Client for `GET /files` and `POST /upload`.

    Implements the FileService protocol.
    """

    def __init__(
        self,
        base_url: str,
        files_endpoint: str = "/files",
        upload_endpoint: str = "/upload",
        field_name: str = "files",
        timeout: int = 300,
        list_timeout: int = 30,
        chunk_size: int = 64 * 1024,
        session: requests.Session | None = None
    ):
        """
        Initialize file service client.

        Args:
            base_url: Service URL (e.g., http://localhost:3000)
            files_endpoint: Listing path
            upload_endpoint: Upload path
            field_name: Multipart field name the service expects
            timeout: Upload request timeout in seconds
            list_timeout: Listing request timeout in seconds
            chunk_size: Body chunk size, i.e. progress granularity
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip('/')
        self.files_url = f"{self.base_url}{files_endpoint}"
        self.upload_url = f"{self.base_url}{upload_endpoint}"
        self.field_name = field_name
        self.timeout = timeout
        self.list_timeout = list_timeout
        self.chunk_size = chunk_size
        self.session = session or requests.Session()
        logger.info(f"FileServiceClient initialized: {self.base_url}")

    def list_files(self) -> list[RemoteFileRecord]:
        """
        List all files stored by the service.

        Returns:
            Remote file records in service order

        Raises:
            FetchError: If the request fails or the response is malformed
        """
        try:
            response = self.session.get(self.files_url, timeout=self.list_timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"File listing failed: {e}")
            raise FetchError(f"File listing failed: {e}", url=self.files_url) from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON from file service: {e}", url=self.files_url) from e

        files = data.get("files") if isinstance(data, dict) else None
        if not isinstance(files, list):
            raise FetchError("Response has no 'files' list", url=self.files_url)

        return [RemoteFileRecord.from_dict(item) for item in files if isinstance(item, dict)]

    def upload(
        self,
        file: PendingFile,
        on_progress: ProgressCallback | None = None
    ) -> list[str]:
        """
        Upload a single file as one multipart part.

        Args:
            file: File to upload
            on_progress: Called with (loaded, total) body bytes while sending

        Returns:
            File names reported by the service

        Raises:
            UploadError: If the request fails or the response is malformed
        """
        body, content_type = self.encode_files([file])
        payload = ProgressBody(body, on_progress, chunk_size=self.chunk_size)

        try:
            response = self.session.post(
                self.upload_url,
                data=payload,
                headers={"Content-Type": content_type},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise UploadError(f"Upload request failed: {e}", file_name=file.name) from e
        except ValueError as e:
            raise UploadError(f"Invalid JSON from file service: {e}", file_name=file.name) from e

        return self._extract_filenames(data)

    def encode_files(self, files: list[PendingFile]) -> tuple[bytes, str]:
        """
        Encode files as multipart/form-data, one part per file.

        Returns:
            (body, content type header with boundary)
        """
        fields = []
        for file in files:
            field = RequestField(name=self.field_name, data=file.data, filename=file.name)
            field.make_multipart(content_type=file.content_type or DEFAULT_CONTENT_TYPE)
            fields.append(field)
        return encode_multipart_formdata(fields)

    @staticmethod
    def _extract_filenames(data: Any) -> list[str]:
        """Pull `filename` values out of `{"files": [...]}`"""
        if not isinstance(data, dict):
            return []
        return [
            str(item["filename"])
            for item in data.get("files") or []
            if isinstance(item, dict) and "filename" in item
        ]

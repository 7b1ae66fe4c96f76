"""
Request body that reports upload progress as it is read.
"""

import io
import logging
from typing import Iterator

from upload_dashboard.domain.interfaces.file_service import ProgressCallback

logger = logging.getLogger(__name__)


class ProgressBody:
    """
    File-like wrapper around an encoded request body.

    requests streams it (Content-Length from __len__) and every read
    reports cumulative (loaded, total) to the callback. tell/seek let
    requests rewind the body when a 307/308 redirect re-sends it.
    """

    def __init__(
        self,
        body: bytes,
        on_progress: ProgressCallback | None = None,
        chunk_size: int = 64 * 1024
    ):
        self._body = body
        self._on_progress = on_progress
        self.chunk_size = chunk_size
        self._position = 0

    def __len__(self) -> int:
        return len(self._body)

    @property
    def loaded(self) -> int:
        return self._position

    def read(self, size: int = -1) -> bytes:
        """Read up to `size` bytes (one chunk if size is negative)"""
        if size is None or size < 0:
            size = self.chunk_size

        chunk = self._body[self._position:self._position + size]
        if chunk:
            self._position += len(chunk)
            if self._on_progress:
                self._on_progress(self._position, len(self._body))
        return chunk

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(self.chunk_size)
            if not chunk:
                return
            yield chunk

    def tell(self) -> int:
        return self._position

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_SET:
            position = offset
        elif whence == io.SEEK_CUR:
            position = self._position + offset
        elif whence == io.SEEK_END:
            position = len(self._body) + offset
        else:
            raise ValueError(f"Invalid whence: {whence}")

        if position < 0:
            raise ValueError(f"Negative seek position: {position}")
        self._position = min(position, len(self._body))
        return self._position

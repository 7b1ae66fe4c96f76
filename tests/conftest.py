"""
Shared fixtures: a scripted in-memory file service and sample files.
"""

import io
from datetime import datetime

import pytest
from PIL import Image

from upload_dashboard.application.preview_generator import PreviewGenerator
from upload_dashboard.application.upload_pipeline import UploadPipeline
from upload_dashboard.domain.models.files import PendingFile, RemoteFileRecord


class FakeFileService:
    """
    In-memory FileService.

    Each file name can be scripted with progress events and an outcome
    (server names or an exception). Calls are recorded in `calls`, and an
    overlapping upload fails the test.
    """

    def __init__(self):
        self.remote: list[RemoteFileRecord] = []
        self.scripts: dict[str, dict] = {}
        self.calls: list[str] = []
        self.list_calls = 0
        self.list_error: Exception | None = None
        self._in_flight: str | None = None

    def script(self, name, progress=(), result=None, error=None):
        self.scripts[name] = {"progress": list(progress), "result": result, "error": error}

    def list_files(self):
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.remote)

    def upload(self, file, on_progress=None):
        assert self._in_flight is None, f"{file.name} started while {self._in_flight} in flight"
        self._in_flight = file.name
        self.calls.append(f"start:{file.name}")
        try:
            script = self.scripts.get(file.name, {})
            for loaded, total in script.get("progress", []):
                if on_progress:
                    on_progress(loaded, total)
            if script.get("error") is not None:
                raise script["error"]
            result = script.get("result")
            return [file.name] if result is None else list(result)
        finally:
            self.calls.append(f"end:{file.name}")
            self._in_flight = None


@pytest.fixture
def file_service():
    return FakeFileService()


@pytest.fixture
def preview_generator():
    generator = PreviewGenerator()
    yield generator
    generator.shutdown(wait=True)


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 15, 30, 0)


@pytest.fixture
def pipeline(file_service, preview_generator, fixed_now):
    return UploadPipeline(
        file_service=file_service,
        preview_generator=preview_generator,
        clock=lambda: fixed_now
    )


@pytest.fixture
def png_bytes():
    """A real 40x20 PNG image"""
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def text_file():
    """Factory for plain-text pending files"""
    def make(name: str, size: int = 50) -> PendingFile:
        return PendingFile(name=name, data=b"x" * size, content_type="text/plain")
    return make


@pytest.fixture
def pdf_file():
    """Factory for PDF pending files"""
    def make(name: str, size: int = 80) -> PendingFile:
        return PendingFile(name=name, data=b"%PDF" + b"0" * (size - 4), content_type="application/pdf")
    return make

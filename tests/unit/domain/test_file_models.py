"""
Unit tests for file and state domain models.
"""

from datetime import datetime, timezone

from upload_dashboard.domain.exceptions import UploadError, UploadDashboardException
from upload_dashboard.domain.models.files import (
    FilePreview,
    PendingFile,
    PreviewKind,
    RemoteFileRecord,
)
from upload_dashboard.domain.models.upload_state import PipelineStatus, UploadState


class TestPendingFile:

    def test_identity_equality(self):
        a = PendingFile("a.txt", b"hi", "text/plain")
        b = PendingFile("a.txt", b"hi", "text/plain")
        assert a != b
        assert a == a

    def test_classification(self):
        assert PendingFile("p.png", b"", "image/png").is_image()
        assert PendingFile("d.pdf", b"", "application/pdf").is_pdf()
        assert not PendingFile("n", b"", "").is_image()

    def test_size(self):
        assert PendingFile("a", b"12345").size == 5


class TestRemoteFileRecord:

    def test_from_dict(self):
        record = RemoteFileRecord.from_dict(
            {"filename": "a.txt", "path": "uploads/a.txt", "uploadedAt": "2026-10-19T10:00:00.000Z"}
        )
        assert record.filename == "a.txt"
        assert record.to_dict()["uploadedAt"] == "2026-10-19T10:00:00.000Z"

    def test_parse_utc(self):
        record = RemoteFileRecord("a", "p", "2026-10-19T10:00:00.000Z")
        assert record.uploaded_at_datetime() == datetime(2026, 10, 19, 10, tzinfo=timezone.utc)

    def test_parse_invalid(self):
        assert RemoteFileRecord("a", "p", "yesterday").uploaded_at_datetime() is None

    def test_missing_fields(self):
        record = RemoteFileRecord.from_dict({"filename": "a"})
        assert record.path == ""
        assert record.uploaded_at_datetime() is None


class TestUploadState:

    def test_begin_file_sets_progress(self):
        state = UploadState()
        state.enqueue([PendingFile("a", b"1")])

        file = state.begin_file(0)

        assert file.name == "a"
        assert state.current_index == 0
        assert state.progress == {"a": 0}

    def test_mark_uploaded_removes_only_own_preview(self):
        a, b = PendingFile("same", b"1"), PendingFile("same", b"2")
        state = UploadState()
        state.enqueue([a, b])
        state.add_preview(FilePreview.none(a))
        state.add_preview(FilePreview.none(b))

        state.mark_uploaded(a, ["same"])

        assert [p.file for p in state.previews] == [b]
        assert state.status is PipelineStatus.ADVANCING

    def test_mark_failed_drops_preview(self):
        a = PendingFile("a", b"1")
        state = UploadState()
        state.enqueue([a])
        state.add_preview(FilePreview.none(a))

        state.mark_failed(a)

        assert state.previews == []
        assert state.uploaded_file_names == []
        assert state.status is PipelineStatus.ADVANCING

    def test_reset_keeps_history(self):
        state = UploadState()
        state.enqueue([PendingFile("a", b"1")])
        state.start()
        state.uploaded_file_names.append("a")
        state.remote_files.append(RemoteFileRecord("a", "p", "t"))

        state.reset()

        assert state.is_idle()
        assert state.uploaded_file_names == ["a"]
        assert len(state.remote_files) == 1

    def test_preview_kind_values(self):
        assert PreviewKind.INLINE.value == "inline"


class TestExceptions:

    def test_details_in_str(self):
        error = UploadError("Upload request failed", file_name="a.txt")
        assert isinstance(error, UploadDashboardException)
        assert "file_name=a.txt" in str(error)
        assert error.details["service_name"] == "File service"

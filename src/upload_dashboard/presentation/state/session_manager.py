"""
Session Manager - Typed wrapper around Streamlit's session_state.

Each browser session gets its own UploadPipeline; the Streamlit script
reruns on every interaction, so the pipeline lives in session_state.
"""
from dataclasses import dataclass
from typing import Any, Callable

from upload_dashboard.application.upload_pipeline import UploadPipeline
from upload_dashboard.domain.models.upload_state import UploadRunSummary


@dataclass
class UIState:
    """State for the dashboard widgets."""

    picker_nonce: int = 0
    initial_fetch_done: bool = False
    last_summary: UploadRunSummary | None = None


class SessionManager:
    """
    Typed wrapper around st.session_state.

    Usage:
        session = SessionManager(st.session_state, lambda: create_pipeline(config))
        session.pipeline.select_files(files)
    """

    PIPELINE_KEY = "upload_pipeline"
    UI_KEY = "upload_ui_state"

    def __init__(self, session_state: Any, pipeline_factory: Callable[[], UploadPipeline]):
        """
        Initialize SessionManager.

        Args:
            session_state: Streamlit session_state object (or any mapping)
            pipeline_factory: Builds the pipeline on first access
        """
        self._state = session_state
        self._pipeline_factory = pipeline_factory

    @property
    def pipeline(self) -> UploadPipeline:
        """Get (or lazily create) this session's pipeline."""
        if self.PIPELINE_KEY not in self._state:
            self._state[self.PIPELINE_KEY] = self._pipeline_factory()
        return self._state[self.PIPELINE_KEY]

    @property
    def ui(self) -> UIState:
        """Get widget state."""
        if self.UI_KEY not in self._state:
            self._state[self.UI_KEY] = UIState()
        return self._state[self.UI_KEY]

    # === PICKER ===

    @property
    def picker_key(self) -> str:
        """Widget key for the file picker; rotating it clears the widget."""
        return f"file_picker_{self.ui.picker_nonce}"

    def clear_picker(self) -> None:
        self.ui.picker_nonce += 1

    # === CONVENIENCE METHODS ===

    def is_uploading(self) -> bool:
        return self.pipeline.state.uploading

    def has_pending_files(self) -> bool:
        return len(self.pipeline.state.queue) > 0

    def ensure_initial_fetch(self) -> bool:
        """
        Fetch today's files once per session.

        Returns:
            True if a fetch was performed
        """
        if self.ui.initial_fetch_done:
            return False
        self.ui.initial_fetch_done = True
        self.pipeline.refresh_remote_files()
        return True

    def save_summary(self, summary: UploadRunSummary) -> None:
        self.ui.last_summary = summary

    def reset(self) -> None:
        """Reset pending uploads and the picker."""
        self.pipeline.reset()
        self.clear_picker()

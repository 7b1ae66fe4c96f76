"""
Progress panel component.
"""

import streamlit as st

from upload_dashboard.domain.models.upload_state import EventKind, StateEvent


class ProgressPanel:
    """
    Per-file progress bars driven by pipeline events.

    Subscribe `handle` to the pipeline channel for the duration of a run.
    """

    def __init__(self, file_names: list[str]):
        """
        Initialize progress panel.

        Args:
            file_names: Queued file names, in upload order
        """
        self.total = len(file_names)
        self.overall = st.progress(0.0)
        self.status_text = st.empty()
        self._bars = {}
        for index, name in enumerate(file_names):
            self._bars[index] = st.progress(0, text=name)
        self.done = 0

    def handle(self, event: StateEvent) -> None:
        """Update widgets for one pipeline event"""
        if event.kind is EventKind.FILE_STARTED:
            self.status_text.text(f"[{event.index + 1}/{self.total}] Uploading {event.file_name}...")
            self._update_bar(event.index, 0, event.file_name)
        elif event.kind is EventKind.PROGRESS:
            self._update_bar(event.index, event.percent, f"{event.file_name} ({event.percent}%)")
        elif event.kind is EventKind.FILE_UPLOADED:
            self._update_bar(event.index, 100, f"✓ {event.file_name}")
            self._advance()
        elif event.kind is EventKind.FILE_FAILED:
            self._update_bar(event.index, 0, f"{event.file_name}")
            self._advance()
        elif event.kind is EventKind.COMPLETED:
            self.complete()

    def _update_bar(self, index: int | None, percent: int | None, text: str | None) -> None:
        bar = self._bars.get(index)
        if bar is not None:
            bar.progress(percent or 0, text=text)

    def _advance(self) -> None:
        self.done += 1
        if self.total > 0:
            self.overall.progress(self.done / self.total)

    def complete(self, message: str = "Upload complete!"):
        """Mark progress as complete"""
        self.overall.progress(1.0)
        self.status_text.success(message)

"""
File picker component.
"""

import logging
from concurrent.futures import wait
from typing import Any

import streamlit as st

from upload_dashboard.application.selection import SelectionResult
from upload_dashboard.domain.models.files import PendingFile
from upload_dashboard.presentation.state.session_manager import SessionManager

logger = logging.getLogger(__name__)

# Upper bound on how long "Add to queue" blocks for thumbnails
PREVIEW_WAIT_SECONDS = 10.0


def to_pending_file(uploaded: Any) -> PendingFile:
    """Convert a Streamlit UploadedFile into a PendingFile"""
    return PendingFile(
        name=uploaded.name,
        data=uploaded.getvalue(),
        content_type=getattr(uploaded, "type", None) or ""
    )


def add_to_queue(
    session: SessionManager,
    uploaded_files: list[Any],
    timeout: float | None = PREVIEW_WAIT_SECONDS
) -> SelectionResult:
    """
    Queue picked files and wait for their image previews.

    Streamlit only redraws on a rerun, so thumbnails still decoding when
    the page reruns would not show up until the next interaction.

    Args:
        session: Session manager
        uploaded_files: Files from st.file_uploader
        timeout: Max seconds to wait for image decodes (None = no limit)

    Returns:
        SelectionResult
    """
    result = session.pipeline.select_files([to_pending_file(f) for f in uploaded_files])

    if result.pending_previews:
        _, not_done = wait(result.pending_previews, timeout=timeout)
        if not_done:
            logger.warning(f"{len(not_done)} previews still decoding after {timeout}s")

    return result


def render_file_picker(session: SessionManager) -> None:
    """
    Render the picker / drop zone and queue selected files.

    The widget key rotates after each "Add" so the next selection
    appends to the queue instead of replacing it.

    Args:
        session: Session manager
    """
    uploaded_files = st.file_uploader(
        "📁 Select files or drag & drop them here",
        accept_multiple_files=True,
        key=session.picker_key,
        disabled=session.is_uploading(),
    )

    if not uploaded_files:
        return

    total_size = sum(getattr(f, "size", 0) for f in uploaded_files)
    st.info(f"📊 {len(uploaded_files)} files selected ({total_size / 1024:.1f} KB)")

    if st.button("➕ Add to queue", disabled=session.is_uploading()):
        with st.spinner("Generating previews..."):
            result = add_to_queue(session, uploaded_files)
        for rejected in result.rejected:
            st.warning(f"⚠️ {rejected.file.name}: {rejected.reason}")
        session.clear_picker()
        st.rerun()

"""
Preview grid component.
"""

from pathlib import Path

import streamlit as st

from upload_dashboard.domain.models.files import FilePreview, PreviewKind
from upload_dashboard.domain.models.upload_state import UploadState


def _render_preview(preview: FilePreview) -> None:
    if preview.kind is PreviewKind.INLINE and preview.payload:
        st.markdown(
            f'<img src="{preview.payload}" style="max-width:100%">',
            unsafe_allow_html=True
        )
    elif preview.kind is PreviewKind.ICON and preview.payload and Path(preview.payload).exists():
        st.image(preview.payload, width=64)
    elif preview.kind is PreviewKind.ICON:
        st.markdown("### 📕")
    else:
        st.markdown("### 📄")


def render_previews(state: UploadState, columns: int = 4) -> None:
    """
    Render previews of queued files.

    Image previews arrive asynchronously, so files may appear in a
    different order than they were selected.

    Args:
        state: Pipeline state
        columns: Grid width
    """
    if not state.queue:
        return

    st.subheader(f"🗂️ Pending files ({len(state.queue)})")

    previews = list(state.previews)
    waiting = len(state.queue) - len(previews)

    cols = st.columns(columns)
    for i, preview in enumerate(previews):
        with cols[i % columns]:
            _render_preview(preview)
            st.caption(f"{preview.file.name} ({preview.file.size / 1024:.1f} KB)")

    if waiting > 0:
        st.caption(f"⏳ {waiting} previews loading...")

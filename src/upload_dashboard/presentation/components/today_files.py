"""
Today's files component.
"""

import streamlit as st

from upload_dashboard.presentation.state.session_manager import SessionManager


def render_today_files(session: SessionManager) -> None:
    """
    Render the list of files uploaded today.

    Args:
        session: Session manager
    """
    header, action = st.columns([4, 1])
    with header:
        st.subheader("📅 Uploaded today")
    with action:
        if st.button("🔄 Refresh", disabled=session.is_uploading()):
            session.pipeline.refresh_remote_files()

    records = session.pipeline.state.remote_files
    if not records:
        st.caption("No files uploaded today.")
        return

    st.dataframe(
        [
            {
                "File": record.filename,
                "Path": record.path,
                "Uploaded at": record.uploaded_at,
            }
            for record in records
        ],
        use_container_width=True,
        hide_index=True
    )

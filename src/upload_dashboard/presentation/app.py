"""
Upload Dashboard - Main Application

Run with: streamlit run src/upload_dashboard/presentation/app.py
"""

import logging

import streamlit as st

# Domain & Config
from upload_dashboard.domain.exceptions import ConfigurationError
from upload_dashboard.domain.models.config import AppConfig

# Infrastructure
from upload_dashboard.infrastructure.factory import create_pipeline

# Presentation
from upload_dashboard.presentation.state.session_manager import SessionManager
from upload_dashboard.presentation.components import (
    render_file_picker,
    render_previews,
    render_today_files,
    ProgressPanel,
)

# === PAGE CONFIG ===
st.set_page_config(
    page_title="Upload Dashboard",
    layout="wide",
    page_icon="📤"
)


# === INITIALIZATION ===

@st.cache_resource
def load_config() -> AppConfig:
    """Load configuration once per server process."""
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    return config


try:
    app_config = load_config()
except ConfigurationError as e:
    st.error(f"❌ {e}")
    st.stop()

logger = logging.getLogger(__name__)
session = SessionManager(st.session_state, lambda: create_pipeline(app_config))


# === MAIN UI ===

def main():
    """Main application UI"""
    st.title("📤 Upload Dashboard")
    st.caption(f"File service: {app_config.api_base_url}")

    session.ensure_initial_fetch()

    render_file_picker(session)
    render_previews(session.pipeline.state)

    if session.has_pending_files():
        col1, col2 = st.columns([3, 1])
        with col1:
            start = st.button(
                "🚀 Upload all",
                type="primary",
                disabled=session.is_uploading(),
                use_container_width=True
            )
        with col2:
            if st.button("🗑️ Clear", disabled=session.is_uploading(), use_container_width=True):
                session.reset()
                st.rerun()

        if start:
            upload_pending()
            st.rerun()

    summary = session.ui.last_summary
    if summary is not None and summary.uploaded:
        st.success(f"✅ Uploaded: {', '.join(session.pipeline.state.uploaded_file_names)}")

    st.divider()
    render_today_files(session)


def upload_pending():
    """Run the upload pipeline with a live progress panel."""
    st.divider()
    st.subheader("🔄 Uploading...")

    pipeline = session.pipeline
    panel = ProgressPanel([f.name for f in pipeline.state.queue])
    unsubscribe = pipeline.subscribe(panel.handle)
    try:
        summary = pipeline.upload_files()
    finally:
        unsubscribe()

    session.save_summary(summary)
    if summary.is_successful():
        logger.info(f"Run finished: {len(summary.uploaded)} uploaded")
    else:
        logger.warning(f"Run finished: {len(summary.uploaded)} uploaded, failed: {', '.join(summary.failed)}")


main()

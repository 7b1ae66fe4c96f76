"""Streamlit UI components"""

from .file_picker import add_to_queue, render_file_picker, to_pending_file
from .previews import render_previews
from .progress_panel import ProgressPanel
from .today_files import render_today_files

__all__ = [
    "add_to_queue",
    "render_file_picker",
    "to_pending_file",
    "render_previews",
    "ProgressPanel",
    "render_today_files",
]

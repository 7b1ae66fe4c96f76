"""State management for Streamlit sessions"""

from .session_manager import SessionManager, UIState

__all__ = ["SessionManager", "UIState"]

"""Application controllers."""

from .session_controller import SessionController

__all__ = ["SessionController"]

"""
Data models for the Innovation Engine assistant.
"""
from .turn import Speaker, Turn
from .session import CLEARED_TEXT, WELCOME_TEXT, Session, SessionState

__all__ = [
    "Speaker", "Turn", "Session", "SessionState", "WELCOME_TEXT", "CLEARED_TEXT",
]

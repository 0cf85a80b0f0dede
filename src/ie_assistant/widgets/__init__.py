"""
Custom UI widgets for the Innovation Engine assistant.
"""
from .frame_view import FrameView

__all__ = ["FrameView"]

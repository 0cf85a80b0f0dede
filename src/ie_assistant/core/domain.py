"""
Terminal events consumed by the session controller.

The Textual app translates its own events into these plain dictionaries so the
controller never depends on the terminal library.
"""

from typing import Literal, Optional, TypedDict, Union


class KeyEvent(TypedDict, total=False):
    type: Literal['key']
    key: str
    character: Optional[str]


class ResizeEvent(TypedDict, total=False):
    type: Literal['resize']
    width: int
    height: int


class PasteEvent(TypedDict, total=False):
    type: Literal['paste']
    text: str


class TickEvent(TypedDict, total=False):
    type: Literal['tick']


DomainEvent = Union[
    KeyEvent, ResizeEvent, PasteEvent, TickEvent,
]


def key_event(key: str, character: Optional[str] = None) -> KeyEvent:
    return {'type': 'key', 'key': key, 'character': character}


def resize_event(width: int, height: int) -> ResizeEvent:
    return {'type': 'resize', 'width': width, 'height': height}


def paste_event(text: str) -> PasteEvent:
    return {'type': 'paste', 'text': text}


def tick_event() -> TickEvent:
    return {'type': 'tick'}

"""
Session state owned by the controller for the life of the process.
"""
from dataclasses import dataclass, field
from enum import Enum

from ie_assistant.core.input_buffer import InputBuffer
from ie_assistant.core.viewport import TranscriptViewport
from ie_assistant.models.turn import Speaker, Turn

WELCOME_TEXT = (
    "Welcome to the Innovation Engine Assistant!\n\n"
    "I can help you create executable documents for Kubernetes tasks.\n\n"
    "Type your question below and press Ctrl+S to send, or use the quick start options:"
)
CLEARED_TEXT = "Chat cleared. How can I help you?"


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


@dataclass
class Session:
    environment: str
    input_buffer: InputBuffer = field(default_factory=InputBuffer)
    viewport: TranscriptViewport = field(default_factory=TranscriptViewport)
    transcript: list[Turn] = field(
        default_factory=lambda: [Turn(Speaker.ASSISTANT, WELCOME_TEXT)]
    )
    state: SessionState = SessionState.UNINITIALIZED
    width: int = 0
    height: int = 0

    @property
    def ready(self) -> bool:
        return self.state is SessionState.READY

    @property
    def closed(self) -> bool:
        return self.state is SessionState.CLOSED

    def joined_transcript(self) -> str:
        return "\n\n".join(turn.render() for turn in self.transcript)

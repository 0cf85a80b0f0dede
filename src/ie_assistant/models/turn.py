"""
Data models for the Innovation Engine assistant transcript.
"""
from dataclasses import dataclass
from enum import Enum


class Speaker(Enum):
    USER = "user"
    ASSISTANT = "assistant"


_LABELS = {
    Speaker.USER: "You",
    Speaker.ASSISTANT: "Assistant",
}


@dataclass(frozen=True)
class Turn:
    """
    Represents a single transcript entry, from the user or the assistant.
    """
    speaker: Speaker
    text: str

    def render(self) -> str:
        return f"{_LABELS[self.speaker]}: {self.text}"

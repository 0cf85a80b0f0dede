"""
Key chords and the actions they trigger.

Resolution order is fixed: quit, clear, send, then the quick actions in order.
Only one action fires per key event.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ActionKind(Enum):
    SEND = "send"
    QUIT = "quit"
    CLEAR = "clear"
    QUICK_ACTION = "quick_action"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    index: Optional[int] = None
    query: Optional[str] = None


@dataclass(frozen=True)
class KeyBinding:
    keys: tuple[str, ...]
    help_key: str
    help_desc: str

    def matches(self, key: str) -> bool:
        return key in self.keys

    def help(self) -> str:
        return f"{self.help_key} {self.help_desc}"


@dataclass(frozen=True)
class QuickAction:
    binding: KeyBinding
    query: str


@dataclass(frozen=True)
class Keymap:
    send: KeyBinding
    quit: KeyBinding
    clear: KeyBinding
    quick_actions: tuple[QuickAction, ...] = ()

    def resolve(self, key: str) -> Optional[Action]:
        """Return the action bound to ``key``, or None for plain editing keys."""
        if self.quit.matches(key):
            return Action(ActionKind.QUIT)
        if self.clear.matches(key):
            return Action(ActionKind.CLEAR)
        if self.send.matches(key):
            return Action(ActionKind.SEND)
        for i, quick in enumerate(self.quick_actions, start=1):
            if quick.binding.matches(key):
                return Action(ActionKind.QUICK_ACTION, index=i, query=quick.query)
        return None

    def short_help(self) -> list[KeyBinding]:
        return [self.send, self.clear, self.quit]

    def full_help(self) -> list[list[KeyBinding]]:
        groups = [[self.send, self.clear, self.quit]]
        if self.quick_actions:
            groups.append([quick.binding for quick in self.quick_actions])
        return groups

    def help_line(self, full: bool = False) -> str:
        if full:
            bindings = [b for group in self.full_help() for b in group]
        else:
            bindings = self.short_help()
        return " • ".join(b.help() for b in bindings)


def default_keymap() -> Keymap:
    return Keymap(
        send=KeyBinding(("ctrl+s",), "ctrl+s", "send query"),
        quit=KeyBinding(("ctrl+c", "escape"), "ctrl+c/esc", "quit"),
        clear=KeyBinding(("ctrl+l",), "ctrl+l", "clear"),
        quick_actions=(
            QuickAction(KeyBinding(("f1",), "f1", "deploy app"),
                        "Create a deployment for my application"),
            QuickAction(KeyBinding(("f2",), "f2", "create service"),
                        "Create a Kubernetes service"),
            QuickAction(KeyBinding(("f3",), "f3", "setup ingress"),
                        "Set up ingress controller"),
        ),
    )

"""Built-in history actions and their default key chords."""

from __future__ import annotations

from . import actions
from .models import ActionRef, KeyBinding, KeyChord
from .registry import CommandRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="history.backward",
        handler=actions.go_backward,
        description="Go back to the previous location",
    ),
    ActionRef(
        id="history.forward",
        handler=actions.go_forward,
        description="Go forward to the next location",
    ),
    ActionRef(
        id="history.clear",
        handler=actions.clear_history,
        description="Forget all recorded locations",
    ),
    ActionRef(
        id="history.status",
        handler=actions.display_status,
        description="Show how many locations are recorded",
    ),
)

DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(KeyChord.parse("alt+left"), "history.backward"),
    KeyBinding(KeyChord.parse("alt+right"), "history.forward"),
    KeyBinding(KeyChord.parse("alt+delete"), "history.clear"),
    KeyBinding(KeyChord.parse("alt+s"), "history.status"),
)


def load_default_commands(registry: CommandRegistry) -> CommandRegistry:
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=True)
    for binding in DEFAULT_BINDINGS:
        registry.bind(binding, replace=True)
    return registry


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_commands"]

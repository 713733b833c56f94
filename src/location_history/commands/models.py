"""Dataclasses describing bindable actions and their key chords."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Optional

if TYPE_CHECKING:
    from location_history.editor import EditorSession
    from location_history.history import HistoryManager

_MODIFIER_ALIASES = {
    "control": "ctrl",
    "meta": "alt",
    "option": "alt",
}


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = (m.strip().lower() for m in modifiers if m.strip())
    normalized = (_MODIFIER_ALIASES.get(value, value) for value in values)
    return tuple(sorted(dict.fromkeys(normalized)))


@dataclass(frozen=True, slots=True)
class KeyChord:
    """Single key press plus its modifiers, e.g. ``alt+left``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key

    @classmethod
    def parse(cls, text: str) -> "KeyChord":
        parts = [part for part in text.strip().split("+") if part]
        if not parts:
            raise ValueError("key chord cannot be empty")
        return cls(key=parts[-1], modifiers=tuple(parts[:-1]))

    def __str__(self) -> str:
        return self.token


@dataclass(slots=True)
class ActionContext:
    """Services every action handler can reach."""

    manager: "HistoryManager"
    session: Optional["EditorSession"] = None


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome returned from an action handler."""

    status: str = "ok"
    message: Optional[str] = None


ActionHandler = Callable[[ActionContext], ActionResult]


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during action execution."""

    id: str
    handler: ActionHandler
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, context: ActionContext) -> ActionResult:
        return self.handler(context)


@dataclass(frozen=True, slots=True)
class KeyBinding:
    """Associates a key chord with an action id."""

    chord: KeyChord
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        if isinstance(self.chord, str):
            object.__setattr__(self, "chord", KeyChord.parse(self.chord))


__all__ = [
    "ActionContext",
    "ActionHandler",
    "ActionRef",
    "ActionResult",
    "KeyBinding",
    "KeyChord",
]

"""Registry mapping key chords to history actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from location_history.runtime.telemetry import span

from .models import ActionContext, ActionRef, ActionResult, KeyBinding, KeyChord


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int


class BindingConflictError(RuntimeError):
    """Raised when a chord is already bound to a different action."""

    def __init__(self, binding: KeyBinding, existing: KeyBinding) -> None:
        super().__init__(
            f"Chord '{binding.chord}' for '{binding.action_id}' is already bound "
            f"to '{existing.action_id}'"
        )
        self.binding = binding
        self.existing = existing


class CommandRegistry:
    """Owns action references and chord bindings."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, KeyBinding] = {}
        self._logger_name = logger_name

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def bind(self, binding: KeyBinding, *, replace: bool = False) -> KeyBinding:
        with span(
            "commands::bind",
            logger_name=self._logger_name,
            component="commands",
            metadata={"chord": binding.chord.token, "action_id": binding.action_id},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Chord '{binding.chord}' references unknown action "
                    f"'{binding.action_id}'"
                )
            existing = self._bindings.get(binding.chord.token)
            if existing and existing.action_id != binding.action_id and not replace:
                raise BindingConflictError(binding, existing)
            self._bindings[binding.chord.token] = binding
            return binding

    def unbind(self, chord: KeyChord | str) -> Optional[KeyBinding]:
        return self._bindings.pop(_token(chord), None)

    def resolve(self, chord: KeyChord | str) -> Optional[ActionRef]:
        binding = self._bindings.get(_token(chord))
        if binding is None:
            return None
        return self._actions.get(binding.action_id)

    def run(self, action_id: str, context: ActionContext) -> ActionResult:
        action = self.get_action(action_id)
        with span(
            f"commands::{action_id}",
            logger_name=self._logger_name,
            component="commands",
        ) as handle:
            result = action(context)
            handle.add_metadata("status", result.status)
            return result

    def bindings(self, action_id: Optional[str] = None) -> Iterator[KeyBinding]:
        for binding in self._bindings.values():
            if action_id is None or binding.action_id == action_id:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
        )


def _token(chord: KeyChord | str) -> str:
    if isinstance(chord, str):
        chord = KeyChord.parse(chord)
    return chord.token


__all__ = ["BindingConflictError", "CommandRegistry", "RegistryStats"]

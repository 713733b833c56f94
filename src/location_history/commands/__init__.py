"""Bindable history actions and the chord registry that dispatches them."""

from .defaults import load_default_commands
from .models import ActionContext, ActionRef, ActionResult, KeyBinding, KeyChord
from .registry import BindingConflictError, CommandRegistry, RegistryStats

__all__ = [
    "ActionContext",
    "ActionRef",
    "ActionResult",
    "BindingConflictError",
    "CommandRegistry",
    "KeyBinding",
    "KeyChord",
    "RegistryStats",
    "load_default_commands",
]

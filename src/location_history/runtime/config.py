"""Static configuration for the history core and its recording glue."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping, Optional

ENV_PREFIX = "LOCATION_HISTORY_"

DEFAULT_MIN_DISTANCE = 1000
DEFAULT_MAX_HISTORY_LENGTH = 30

# Transient helper panes that should never show up in history.
DEFAULT_IGNORED_PATTERNS: tuple[str, ...] = (
    r"^\*Minibuf",
    r"^\*Completions\*$",
    r"^\*Help\*$",
    r"^\*Messages\*$",
    r"^ ",
)

DEFAULT_TRIGGER_COMMANDS: frozenset[str] = frozenset({"insert", "delete", "paste"})


class ConfigError(ValueError):
    """Raised when configuration values are malformed or out of range."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Tuning knobs consumed by ``HistoryManager`` and ``LocationRecorder``."""

    min_distance: int = DEFAULT_MIN_DISTANCE
    max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH
    ignored_patterns: tuple[str, ...] = DEFAULT_IGNORED_PATTERNS
    trigger_commands: frozenset[str] = field(
        default_factory=lambda: DEFAULT_TRIGGER_COMMANDS
    )

    def __post_init__(self) -> None:
        if self.min_distance < 0:
            raise ConfigError("min_distance cannot be negative", key="min_distance")
        if self.max_history_length < 1:
            raise ConfigError(
                "max_history_length must be at least 1", key="max_history_length"
            )
        object.__setattr__(self, "ignored_patterns", tuple(self.ignored_patterns))
        object.__setattr__(self, "trigger_commands", frozenset(self.trigger_commands))
        for pattern in self.ignored_patterns:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(
                    f"Invalid ignore pattern {pattern!r}: {exc}",
                    key="ignored_patterns",
                ) from exc

    def with_overrides(self, **changes: object) -> "HistoryConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: object
    ) -> "HistoryConfig":
        """Build a config from ``LOCATION_HISTORY_*`` variables.

        Keyword ``overrides`` win over the environment.
        """

        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        min_distance = _env_int(env, "MIN_DISTANCE")
        if min_distance is not None:
            values["min_distance"] = min_distance
        max_length = _env_int(env, "MAX_LENGTH")
        if max_length is not None:
            values["max_history_length"] = max_length
        ignored = env.get(f"{ENV_PREFIX}IGNORE")
        if ignored is not None:
            values["ignored_patterns"] = tuple(_split_list(ignored))
        triggers = env.get(f"{ENV_PREFIX}TRIGGERS")
        if triggers is not None:
            values["trigger_commands"] = frozenset(_split_list(triggers))

        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    key = f"{ENV_PREFIX}{name}"
    raw = env.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}", key=key) from exc


def _split_list(raw: str) -> Iterable[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


__all__ = [
    "ConfigError",
    "HistoryConfig",
    "DEFAULT_IGNORED_PATTERNS",
    "DEFAULT_MAX_HISTORY_LENGTH",
    "DEFAULT_MIN_DISTANCE",
    "DEFAULT_TRIGGER_COMMANDS",
]

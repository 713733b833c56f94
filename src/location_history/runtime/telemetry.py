"""telelog-backed logging for the history core and its host glue.

Three calls cover everything the package logs:

``configure(...)`` -- swap the shared telelog config (level, file, JSON)
``record_event(name, data=...)`` -- one structured ``event::<name>`` record
``span(name, ...)`` -- profile a block, tracked as its own component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LOCATION_HISTORY_"
HISTORY_LOGGER = "location_history.history"

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _pairs(data: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), str(value)) for key, value in data.items()]


def build_config(
    *, level: Optional[str] = None, log_file: Optional[str] = None
) -> Any:
    """Config from arguments, falling back to ``LOCATION_HISTORY_LOG_*``."""

    config = tl.Config()
    config.with_min_level((level or _env("LOG_LEVEL") or "WARNING").upper())
    quiet = (_env("LOG_QUIET") or "").lower() in {"1", "true", "yes", "on"}
    config.with_console_output(not quiet)
    path = log_file or _env("LOG_FILE")
    if path:
        config.with_file_output(path)
    if _env("LOG_JSON"):
        config.with_json_format(True)
    config.with_profiling(True)
    return config


def configure(
    config: Optional[Any] = None,
    *,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    global _config
    _config = config if config is not None else build_config(
        level=level, log_file=log_file
    )
    _loggers.clear()


def _logger(name: Optional[str]) -> Any:
    global _config
    key = name or HISTORY_LOGGER
    if key not in _loggers:
        if _config is None:
            _config = build_config()
        _loggers[key] = tl.Logger.with_config(key, _config)
    return _loggers[key]


def _emit(log: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
    else:
        getattr(log, level)(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    data: Optional[Mapping[str, Any]] = None,
    level: str = "debug",
    logger_name: Optional[str] = None,
) -> None:
    """Write ``event::<name>``; history events go to the history logger."""

    payload = {"event": name, **(data or {})}
    _emit(_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Lets the profiled block attach outcome details to its span."""

    logger: Any
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = str(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.name, "reason": reason, **self.metadata}
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Profile a block; ``component`` defaults to the span name.

    ``metadata`` is attached as logger context while the block runs.
    """

    log = _logger(logger_name)
    handle = SpanHandle(logger=log, name=name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
        log.add_context(key, handle.metadata[key])

    with ExitStack() as stack:
        stack.enter_context(log.track_component(component or name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in metadata or {}:
                log.remove_context(key)


__all__ = ["SpanHandle", "build_config", "configure", "record_event", "span"]

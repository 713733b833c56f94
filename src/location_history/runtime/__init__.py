"""Runtime services: configuration and telemetry."""

from .config import ConfigError, HistoryConfig

__all__ = ["ConfigError", "HistoryConfig"]

"""Back/forward location history for text editors."""

__all__ = [
    "adapters",
    "commands",
    "editor",
    "history",
    "recording",
    "runtime",
]

__version__ = "0.1.0"

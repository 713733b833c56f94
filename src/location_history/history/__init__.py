"""Location history: the back/forward stacks and their host protocols."""

from .entry import DocumentId, LocationEntry
from .interfaces import BufferRegistry, Navigator
from .manager import HistoryManager, HistoryStatus

__all__ = [
    "BufferRegistry",
    "DocumentId",
    "HistoryManager",
    "HistoryStatus",
    "LocationEntry",
    "Navigator",
]

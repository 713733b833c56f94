"""Boundary protocols the history manager consumes from its host."""

from __future__ import annotations

from typing import Optional, Protocol

from .entry import DocumentId, LocationEntry


class BufferRegistry(Protocol):
    """Answers liveness and size questions about documents."""

    def is_live(self, document: DocumentId) -> bool:
        """Return ``True`` while ``document`` is still open."""
        ...

    def content_length(self, document: DocumentId) -> int:
        """Return the current length of a live document."""
        ...


class Navigator(Protocol):
    """Host-side collaborator used by backward/forward traversal."""

    def current_location(self) -> Optional[LocationEntry]:
        """Where the cursor is right now, if anywhere."""
        ...

    def is_eligible(self, document: DocumentId) -> bool:
        """Whether ``document`` may be recorded into history."""
        ...

    def navigate(self, entry: LocationEntry) -> None:
        """Switch to ``entry`` without re-triggering recording."""
        ...

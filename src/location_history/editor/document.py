"""Immutable text documents hosted by the reference editor."""

from __future__ import annotations

from dataclasses import dataclass

from location_history.history import DocumentId


@dataclass(frozen=True, slots=True)
class Document:
    """Versioned text value.

    Offsets are 1-based to match cursor positions: inserting at ``1``
    prepends and inserting at ``length + 1`` appends.
    """

    id: DocumentId
    name: str
    text: str = ""
    version: int = 0

    @property
    def length(self) -> int:
        return len(self.text)

    def clamp(self, position: int) -> int:
        return max(1, min(position, self.length + 1))

    def insert(self, position: int, text: str) -> "Document":
        """Return a new document with ``text`` inserted before ``position``."""

        index = self.clamp(position) - 1
        return self._bump(self.text[:index] + text + self.text[index:])

    def delete(self, start: int, end: int) -> "Document":
        """Return a new document without the ``[start, end)`` range."""

        lo, hi = sorted((self.clamp(start), self.clamp(end)))
        if lo == hi:
            return self
        return self._bump(self.text[: lo - 1] + self.text[hi - 1 :])

    def _bump(self, text: str) -> "Document":
        return Document(id=self.id, name=self.name, text=text, version=self.version + 1)

"""Location entries: the atomic unit of navigation history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

DocumentId = NewType("DocumentId", int)


@dataclass(frozen=True, slots=True)
class LocationEntry:
    """A visited ``(document, position)`` pair.

    ``document`` is a stable handle resolved through a buffer registry; the
    entry never keeps the document itself alive. ``position`` is a 1-based
    offset, so a document of length ``n`` accepts ``1..n + 1``.
    """

    document: DocumentId
    position: int

    def with_position(self, position: int) -> "LocationEntry":
        return LocationEntry(self.document, position)

    def distance_to(self, other: "LocationEntry") -> int | None:
        """Offset distance to ``other``, or ``None`` across documents."""

        if other.document != self.document:
            return None
        return abs(self.position - other.position)

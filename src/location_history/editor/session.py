"""Editor session: active document, cursor, mark, and command events."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from location_history.history import DocumentId, LocationEntry
from location_history.runtime import telemetry

from .document import Document
from .workspace import Workspace

Callback = Callable[[object], None]


class EventBus:
    """Minimal event bus letting host glue observe editor activity."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callback]] = {}

    def subscribe(self, event: str, callback: Callback) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callback) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class EditorSession:
    """Single-window editing state driving the history's recording trigger.

    Every user-level command finishes by emitting ``command.complete``;
    document switches and mark setting emit their own events as well.
    ``jump`` is the programmatic counterpart used for history replay; it
    still announces document switches, so replay must be suppressed by
    whoever listens.
    """

    def __init__(self, workspace: Workspace, *, bus: Optional[EventBus] = None) -> None:
        self.workspace = workspace
        self.bus = bus or EventBus()
        self.current: Optional[DocumentId] = None
        self.point = 1
        self.mark: Optional[int] = None
        self._points: Dict[DocumentId, int] = {}

    @property
    def document(self) -> Optional[Document]:
        if self.current is None or not self.workspace.is_live(self.current):
            return None
        return self.workspace.get(self.current)

    def current_location(self) -> Optional[LocationEntry]:
        if self.document is None:
            return None
        return LocationEntry(self.current, self.point)  # type: ignore[arg-type]

    def open_document(self, name: str, text: str = "") -> DocumentId:
        document = self.workspace.open(name, text)
        if self.current is None:
            self._activate(document, 1)
        self._complete("open_document")
        return document

    def close_document(self, document: DocumentId) -> None:
        """Close ``document``; closing the active one switches to the first left."""

        self.workspace.close(document)
        self._points.pop(document, None)
        if document == self.current:
            self.current = None
            self.mark = None
            fallback = next(iter(self.workspace.documents()), None)
            if fallback is not None:
                self._activate(fallback.id, self._points.get(fallback.id, 1))
                self.bus.emit(
                    "document.switch", {"document": fallback.id, "previous": document}
                )
        self._complete("close_document")

    def switch_to(self, document: DocumentId) -> None:
        previous = self.current
        self._activate(document, self._points.get(document, 1))
        self.bus.emit("document.switch", {"document": document, "previous": previous})
        self._complete("switch_to")

    def goto(self, point: int) -> None:
        self.point = self._require_document().clamp(point)
        self._complete("goto")

    def move(self, delta: int) -> None:
        self.point = self._require_document().clamp(self.point + delta)
        self._complete("move")

    def set_mark(self) -> None:
        self._require_document()
        self.mark = self.point
        self.bus.emit("mark.set", {"document": self.current, "position": self.point})
        self._complete("set_mark")

    def insert(self, text: str) -> None:
        self._edit_insert(text)
        self._complete("insert")

    def paste(self, text: str) -> None:
        self._edit_insert(text)
        self._complete("paste")

    def delete(self, count: int = 1) -> None:
        document = self._require_document()
        self._store(document.delete(self.point, self.point + count))
        self._complete("delete")

    def backspace(self, count: int = 1) -> None:
        document = self._require_document()
        start = document.clamp(self.point - count)
        self._store(document.delete(start, self.point))
        self.point = start
        self._complete("delete")

    def jump(self, entry: LocationEntry) -> None:
        """Programmatic switch + move; never emits ``command.complete``."""

        document = self.workspace.get(entry.document)
        previous = self.current
        self._activate(document.id, document.clamp(entry.position))
        if previous != document.id:
            self.bus.emit(
                "document.switch", {"document": document.id, "previous": previous}
            )

    def _edit_insert(self, text: str) -> None:
        document = self._require_document()
        self._store(document.insert(self.point, text))
        self.point += len(text)

    def _store(self, document: Document) -> None:
        self.workspace.replace(document)
        self.point = document.clamp(self.point)

    def _activate(self, document: DocumentId, point: int) -> None:
        target = self.workspace.get(document)
        if self.current is not None:
            self._points[self.current] = self.point
        if self.current != document:
            self.mark = None
        self.current = target.id
        self.point = target.clamp(point)

    def _require_document(self) -> Document:
        document = self.document
        if document is None:
            raise RuntimeError("No active document in the editor session")
        return document

    def _complete(self, command: str) -> None:
        telemetry.record_event(
            "editor.command",
            data={"command": command, "document": self.current, "point": self.point},
        )
        self.bus.emit("command.complete", {"command": command})


__all__ = ["EditorSession", "EventBus"]

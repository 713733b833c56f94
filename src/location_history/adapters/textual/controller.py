"""Textual-facing controller routing keys to editing commands or history actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from location_history.commands import ActionContext, ActionResult, CommandRegistry
from location_history.editor import EditorSession
from location_history.history import HistoryManager


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class DocumentView:
    """Snapshot the host renders for the active document."""

    name: str
    text: str
    point: int


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[Optional[DocumentView]], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHistoryAdapter:
    """Bridges Textual key events to an ``EditorSession`` and its history."""

    def __init__(
        self,
        session: EditorSession,
        manager: HistoryManager,
        registry: CommandRegistry,
        hooks: TextualUIHooks,
    ) -> None:
        self.session = session
        self.manager = manager
        self.registry = registry
        self.hooks = hooks
        self._editing: Dict[str, Callable[[], None]] = {
            "backspace": self.session.backspace,
            "delete": self.session.delete,
            "left": lambda: self.session.move(-1),
            "right": lambda: self.session.move(1),
            "home": lambda: self.session.goto(1),
            "end": self._goto_end,
            "ctrl+space": self.session.set_mark,
            "tab": self.next_document,
        }
        self.refresh()

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> str:
        """Dispatch one key; returns the status label shown to the user."""

        action = self.registry.resolve(key)
        if action is not None:
            result = self.registry.run(
                action.id, ActionContext(manager=self.manager, session=self.session)
            )
            return self._after(key, result)

        if self.session.document is None:
            return self._after(key, ActionResult(status="no_document"))

        handler = self._editing.get(key)
        if handler is not None:
            handler()
            return self._after(key, ActionResult(status=key))
        if text and text.isprintable():
            self.session.insert(text)
            return self._after(key, ActionResult(status="insert"))
        return self._after(key, ActionResult(status="ignored"))

    def next_document(self) -> None:
        documents = [document.id for document in self.session.workspace.documents()]
        if not documents:
            return
        if self.session.current in documents:
            index = documents.index(self.session.current)
            target = documents[(index + 1) % len(documents)]
        else:
            target = documents[0]
        self.session.switch_to(target)

    def refresh(self, status: Optional[str] = None) -> None:
        document = self.session.document
        if document is None:
            self.hooks.update_buffer(None)
        else:
            self.hooks.update_buffer(
                DocumentView(
                    name=document.name, text=document.text, point=self.session.point
                )
            )
        self.hooks.update_status(status or str(self.manager.status()))

    def _goto_end(self) -> None:
        document = self.session.document
        if document is not None:
            self.session.goto(document.length + 1)

    def _after(self, key: str, result: ActionResult) -> str:
        status = result.message or result.status
        self.hooks.log(
            f"key -> {key!r} status={result.status!r} "
            f"document={self.session.current!r} point={self.session.point}"
        )
        self.refresh(result.message)
        return status


__all__ = ["DocumentView", "TextualHistoryAdapter", "TextualUIHooks"]

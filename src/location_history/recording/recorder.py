"""Observer glue feeding editor events into the history manager."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from location_history.editor import EditorSession
from location_history.history import DocumentId, HistoryManager, LocationEntry
from location_history.runtime import telemetry
from location_history.runtime.config import HistoryConfig

from .eligibility import DocumentFilter

LOGGER_NAME = "location_history.recording"


class LocationRecorder:
    """Subscribes to a session's bus and records eligible locations.

    The recorder is also the manager's ``Navigator``: replay jumps go through
    ``navigate`` which suspends recording for the duration of the jump.
    """

    def __init__(
        self,
        manager: HistoryManager,
        session: EditorSession,
        *,
        config: Optional[HistoryConfig] = None,
        document_filter: Optional[DocumentFilter] = None,
    ) -> None:
        self.manager = manager
        self.session = session
        self.config = config or manager.config
        self.document_filter = document_filter or DocumentFilter(
            self.config.ignored_patterns
        )
        self._suppressed = 0
        self._subscriptions = (
            ("command.complete", self._on_command_complete),
            ("document.switch", self._on_location_event),
            ("mark.set", self._on_location_event),
        )
        for event, callback in self._subscriptions:
            session.bus.subscribe(event, callback)
        manager.attach(self)

    @property
    def is_suppressed(self) -> bool:
        return self._suppressed > 0

    @contextmanager
    def suppressed(self) -> Iterator[None]:
        self._suppressed += 1
        try:
            yield
        finally:
            self._suppressed -= 1

    def detach(self) -> None:
        for event, callback in self._subscriptions:
            self.session.bus.unsubscribe(event, callback)
        if self.manager.navigator is self:
            self.manager.attach(None)

    def record_current(self, reason: str) -> bool:
        """Record the session's location if allowed; returns whether it did."""

        if self.is_suppressed:
            return False
        location = self.session.current_location()
        if location is None or not self.is_eligible(location.document):
            return False
        telemetry.record_event(
            "recording.capture",
            logger_name=LOGGER_NAME,
            data={"reason": reason, "document": location.document},
        )
        self.manager.record(location.document, location.position)
        return True

    # Navigator

    def current_location(self) -> Optional[LocationEntry]:
        return self.session.current_location()

    def is_eligible(self, document: DocumentId) -> bool:
        workspace = self.session.workspace
        if not workspace.is_live(document):
            return False
        return self.document_filter.is_eligible(workspace.name_of(document))

    def navigate(self, entry: LocationEntry) -> None:
        with self.suppressed():
            self.session.jump(entry)

    def _on_command_complete(self, payload: object | None) -> None:
        command = payload.get("command") if isinstance(payload, dict) else None
        if command in self.config.trigger_commands:
            self.record_current(f"command:{command}")

    def _on_location_event(self, payload: object | None) -> None:
        del payload
        self.record_current("location")


__all__ = ["LocationRecorder"]

"""Back/forward location history with merge-on-record and lazy pruning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from location_history.runtime import telemetry
from location_history.runtime.config import HistoryConfig

from .entry import DocumentId, LocationEntry
from .interfaces import BufferRegistry, Navigator


@dataclass(frozen=True, slots=True)
class HistoryStatus:
    """Entry counts on each side of the cursor after the latest prune."""

    past: int
    future: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.past, self.future)

    def __str__(self) -> str:
        return f"history: {self.past} back, {self.future} forward"


class HistoryManager:
    """Owns the ``past`` and ``future`` stacks for one editor session.

    Both stacks are stored most-recent-first: ``past[0]`` is the last
    visited location and ``future[0]`` is where ``go_forward`` lands next.
    Entries referring to closed documents are dropped lazily, before any
    operation looks at the stacks, and surviving positions are clamped to
    the document's current bounds.
    """

    def __init__(
        self,
        registry: BufferRegistry,
        *,
        config: Optional[HistoryConfig] = None,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self.registry = registry
        self.config = config or HistoryConfig()
        self._navigator = navigator
        self._past: List[LocationEntry] = []
        self._future: List[LocationEntry] = []

    @property
    def past(self) -> tuple[LocationEntry, ...]:
        return tuple(self._past)

    @property
    def future(self) -> tuple[LocationEntry, ...]:
        return tuple(self._future)

    @property
    def navigator(self) -> Optional[Navigator]:
        return self._navigator

    def attach(self, navigator: Optional[Navigator]) -> None:
        self._navigator = navigator

    def record(self, document: DocumentId, position: int) -> None:
        """Register a visited location.

        A location close to the head entry (same document, distance below
        ``min_distance``) replaces the head; anything else becomes a new head
        and invalidates the forward stack.
        """

        with telemetry.span(
            "history::record",
            metadata={"document": document, "position": position},
        ) as handle:
            self.prune()
            entry = LocationEntry(document, position)
            top = self._past[0] if self._past else None
            if top is None or self._is_nearby(top, entry):
                self._past[:1] = [entry]
                handle.add_metadata("action", "replace")
                return

            self._past.insert(0, entry)
            self._future.clear()
            handle.add_metadata("action", "append")
            self._enforce_capacity()

    def go_backward(self) -> HistoryStatus:
        """Step to the previous location.

        On the first backward step (no forward stack yet) the current
        location is recorded so ``go_forward`` can return to it. An empty
        history stays empty: there is nowhere to go back to.
        """

        navigator = self._navigator
        with telemetry.span("history::backward") as handle:
            self.prune()
            current = navigator.current_location() if navigator else None
            if (
                self._past
                and not self._future
                and current is not None
                and navigator is not None
                and navigator.is_eligible(current.document)
            ):
                self.record(current.document, current.position)

            if not self._past:
                handle.add_metadata("outcome", "empty")
                return self._report()

            candidate = self._past.pop(0)
            if candidate == current:
                if self._past:
                    self._future.insert(0, candidate)
                    self._navigate(self._past[0])
                    handle.add_metadata("outcome", "stepped")
                else:
                    self._past.insert(0, candidate)
                    handle.add_metadata("outcome", "at_oldest")
            else:
                self._past.insert(0, candidate)
                self._navigate(candidate)
                handle.add_metadata("outcome", "returned")
            return self._report()

    def go_forward(self) -> HistoryStatus:
        """Replay the most recent backward step, if any."""

        with telemetry.span("history::forward"):
            self.prune()
            if self._future:
                entry = self._future.pop(0)
                self._past.insert(0, entry)
                self._enforce_capacity()
                self._navigate(entry)
            return self._report()

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()
        telemetry.record_event("history.clear")

    def status(self) -> HistoryStatus:
        self.prune()
        return HistoryStatus(past=len(self._past), future=len(self._future))

    def prune(self) -> None:
        """Drop dead-document entries, clamp positions and cap ``past``."""

        capped = self._past[: self.config.max_history_length]
        evicted = len(self._past) - len(capped)
        past, past_dropped, past_clamped = self._filter_live(capped)
        future, future_dropped, future_clamped = self._filter_live(self._future)
        self._past = past
        self._future = future

        if evicted or past_dropped or future_dropped or past_clamped or future_clamped:
            telemetry.record_event(
                "history.prune",
                data={
                    "evicted": evicted,
                    "dropped": past_dropped + future_dropped,
                    "clamped": past_clamped + future_clamped,
                },
            )

    def _filter_live(
        self, entries: Iterable[LocationEntry]
    ) -> tuple[List[LocationEntry], int, int]:
        kept: List[LocationEntry] = []
        dropped = clamped = 0
        for entry in entries:
            if not self.registry.is_live(entry.document):
                dropped += 1
                continue
            limit = self.registry.content_length(entry.document) + 1
            if entry.position > limit:
                entry = entry.with_position(limit)
                clamped += 1
            kept.append(entry)
        return kept, dropped, clamped

    def _is_nearby(self, top: LocationEntry, entry: LocationEntry) -> bool:
        distance = top.distance_to(entry)
        return distance is not None and distance < self.config.min_distance

    def _enforce_capacity(self) -> None:
        overflow = len(self._past) - self.config.max_history_length
        if overflow > 0:
            del self._past[self.config.max_history_length :]
            telemetry.record_event(
                "history.evict",
                data={"count": overflow},
            )

    def _navigate(self, entry: LocationEntry) -> None:
        navigator = self._require_navigator()
        telemetry.record_event(
            "history.navigate",
            data={"document": entry.document, "position": entry.position},
        )
        navigator.navigate(entry)

    def _report(self) -> HistoryStatus:
        status = HistoryStatus(past=len(self._past), future=len(self._future))
        telemetry.record_event(
            "history.status",
            data={"past": status.past, "future": status.future},
        )
        return status

    def _require_navigator(self) -> Navigator:
        if self._navigator is None:
            raise RuntimeError("No navigator attached to the history manager")
        return self._navigator


__all__ = ["HistoryManager", "HistoryStatus"]

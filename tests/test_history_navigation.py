from __future__ import annotations

from typing import List, Optional

import pytest

from location_history.editor import Workspace
from location_history.history import DocumentId, HistoryManager, LocationEntry
from location_history.runtime import HistoryConfig


class FakeNavigator:
    def __init__(
        self,
        location: Optional[LocationEntry] = None,
        *,
        ineligible: tuple[DocumentId, ...] = (),
    ) -> None:
        self.location = location
        self.ineligible = ineligible
        self.jumps: List[LocationEntry] = []

    def current_location(self) -> Optional[LocationEntry]:
        return self.location

    def is_eligible(self, document: DocumentId) -> bool:
        return document not in self.ineligible

    def navigate(self, entry: LocationEntry) -> None:
        self.jumps.append(entry)
        self.location = entry


def make_workspace(*names: str) -> tuple[Workspace, list[DocumentId]]:
    workspace = Workspace()
    docs = [workspace.open(name, "x" * 5000) for name in names]
    return workspace, docs


def test_traversal_on_empty_history_needs_no_navigator() -> None:
    workspace, _ = make_workspace()
    manager = HistoryManager(workspace)

    assert manager.go_backward().as_tuple() == (0, 0)
    assert manager.go_forward().as_tuple() == (0, 0)


def test_stepping_back_without_navigator_raises() -> None:
    workspace, (a,) = make_workspace("a.txt")
    manager = HistoryManager(workspace)
    manager.record(a, 10)

    with pytest.raises(RuntimeError):
        manager.go_backward()
    assert manager.past == (LocationEntry(a, 10),)


def test_first_backward_captures_current_location() -> None:
    workspace, (doc,) = make_workspace("a.txt")
    navigator = FakeNavigator(LocationEntry(doc, 50))
    manager = HistoryManager(
        workspace, config=HistoryConfig(min_distance=20), navigator=navigator
    )
    manager.record(doc, 10)

    status = manager.go_backward()

    assert navigator.jumps == [LocationEntry(doc, 10)]
    assert manager.future == (LocationEntry(doc, 50),)
    assert manager.past == (LocationEntry(doc, 10),)
    assert status.as_tuple() == (1, 1)


def test_backward_then_forward_restores_starting_point() -> None:
    workspace, (a, b, c) = make_workspace("a.txt", "b.txt", "c.txt")
    navigator = FakeNavigator(LocationEntry(c, 1))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(b, 5)
    manager.record(a, 10)

    manager.go_backward()
    manager.go_backward()

    assert navigator.location == LocationEntry(b, 5)
    assert manager.past == (LocationEntry(b, 5),)
    assert manager.future == (LocationEntry(a, 10), LocationEntry(c, 1))

    manager.go_forward()
    manager.go_forward()

    assert navigator.location == LocationEntry(c, 1)
    assert manager.future == ()
    assert manager.past == (
        LocationEntry(c, 1),
        LocationEntry(a, 10),
        LocationEntry(b, 5),
    )


def test_backward_at_oldest_entry_stays_put() -> None:
    workspace, (doc,) = make_workspace("a.txt")
    navigator = FakeNavigator(LocationEntry(doc, 10))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(doc, 10)

    status = manager.go_backward()

    assert navigator.jumps == []
    assert manager.past == (LocationEntry(doc, 10),)
    assert status.as_tuple() == (1, 0)


def test_nearby_current_location_merges_before_stepping() -> None:
    workspace, (doc,) = make_workspace("a.txt")
    navigator = FakeNavigator(LocationEntry(doc, 50))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(doc, 10)

    manager.go_backward()

    assert navigator.jumps == []
    assert manager.past == (LocationEntry(doc, 50),)


def test_backward_returns_to_head_when_cursor_moved_away() -> None:
    workspace, (a, c) = make_workspace("a.txt", "c.txt")
    navigator = FakeNavigator(LocationEntry(c, 1))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(a, 10)
    manager.go_backward()
    navigator.location = LocationEntry(a, 20)

    manager.go_backward()

    assert navigator.jumps == [LocationEntry(a, 10), LocationEntry(a, 10)]
    assert manager.past == (LocationEntry(a, 10),)
    assert manager.future == (LocationEntry(c, 1),)


def test_ineligible_current_document_is_not_captured() -> None:
    workspace, (a, helper) = make_workspace("a.txt", "*Help*")
    navigator = FakeNavigator(LocationEntry(helper, 3), ineligible=(helper,))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(a, 10)

    manager.go_backward()

    assert navigator.jumps == [LocationEntry(a, 10)]
    assert manager.past == (LocationEntry(a, 10),)
    assert manager.future == ()


def test_forward_with_empty_future_is_noop() -> None:
    workspace, (doc,) = make_workspace("a.txt")
    navigator = FakeNavigator(LocationEntry(doc, 1))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(doc, 3000)

    status = manager.go_forward()

    assert navigator.jumps == []
    assert status.as_tuple() == (1, 0)


def test_clear_then_navigation_is_noop() -> None:
    workspace, (a, b) = make_workspace("a.txt", "b.txt")
    navigator = FakeNavigator(LocationEntry(b, 1))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(a, 10)
    manager.go_backward()

    manager.clear()
    backward = manager.go_backward()
    forward = manager.go_forward()

    assert navigator.jumps == [LocationEntry(a, 10)]
    assert backward.as_tuple() == (0, 0)
    assert forward.as_tuple() == (0, 0)
    assert manager.status().as_tuple() == (0, 0)


def test_distant_record_invalidates_future() -> None:
    workspace, (doc,) = make_workspace("a.txt")
    navigator = FakeNavigator(LocationEntry(doc, 3000))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(doc, 100)
    manager.record(doc, 3000)
    manager.go_backward()
    assert manager.future == (LocationEntry(doc, 3000),)

    manager.record(doc, 4500)

    assert manager.past == (LocationEntry(doc, 4500), LocationEntry(doc, 100))
    assert manager.future == ()


def test_nearby_record_keeps_future() -> None:
    workspace, (doc,) = make_workspace("a.txt")
    navigator = FakeNavigator(LocationEntry(doc, 3000))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(doc, 100)
    manager.record(doc, 3000)
    manager.go_backward()

    manager.record(doc, 150)

    assert manager.past == (LocationEntry(doc, 150),)
    assert manager.future == (LocationEntry(doc, 3000),)


def test_forward_skips_closed_documents() -> None:
    workspace, (a, b) = make_workspace("a.txt", "b.txt")
    navigator = FakeNavigator(LocationEntry(b, 1))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(a, 10)
    manager.go_backward()
    assert manager.future == (LocationEntry(b, 1),)

    workspace.close(b)
    status = manager.go_forward()

    assert navigator.jumps == [LocationEntry(a, 10)]
    assert status.as_tuple() == (1, 0)


def test_future_positions_are_clamped_when_document_shrinks() -> None:
    workspace, (a, b) = make_workspace("a.txt", "b.txt")
    navigator = FakeNavigator(LocationEntry(b, 4000))
    manager = HistoryManager(workspace, navigator=navigator)
    manager.record(a, 10)
    manager.go_backward()
    assert manager.future == (LocationEntry(b, 4000),)

    workspace.replace(workspace.get(b).delete(1, 4001))
    manager.prune()

    assert manager.future == (LocationEntry(b, 1001),)
    manager.go_forward()
    assert navigator.jumps[-1] == LocationEntry(b, 1001)


def test_forward_keeps_past_within_capacity() -> None:
    workspace, (a, b, c) = make_workspace("a.txt", "b.txt", "c.txt")
    navigator = FakeNavigator(LocationEntry(c, 1))
    manager = HistoryManager(
        workspace, config=HistoryConfig(max_history_length=2), navigator=navigator
    )
    manager.record(a, 10)
    manager.record(b, 10)

    assert manager.go_backward().as_tuple() == (1, 1)
    manager.go_forward()

    assert len(manager.past) <= 2
    assert manager.past == (LocationEntry(c, 1), LocationEntry(b, 10))


def test_forward_evicts_oldest_when_capacity_shrinks() -> None:
    workspace, (a, b, c) = make_workspace("a.txt", "b.txt", "c.txt")
    navigator = FakeNavigator(LocationEntry(c, 1))
    manager = HistoryManager(
        workspace, config=HistoryConfig(max_history_length=2), navigator=navigator
    )
    manager.record(a, 10)
    manager.record(b, 10)
    manager.go_backward()

    manager.config = manager.config.with_overrides(max_history_length=1)
    status = manager.go_forward()

    assert manager.past == (LocationEntry(c, 1),)
    assert status.as_tuple() == (1, 0)
    assert navigator.jumps[-1] == LocationEntry(c, 1)

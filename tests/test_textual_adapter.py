from __future__ import annotations

from typing import List, Optional

from location_history.adapters.textual import (
    DocumentView,
    TextualHistoryAdapter,
    TextualUIHooks,
)
from location_history.commands import CommandRegistry, load_default_commands
from location_history.editor import EditorSession, Workspace
from location_history.history import HistoryManager, LocationEntry
from location_history.recording import LocationRecorder


def make_adapter(
    views: List[Optional[DocumentView]],
    statuses: List[str],
    logs: Optional[List[str]] = None,
) -> tuple[TextualHistoryAdapter, EditorSession, HistoryManager]:
    workspace = Workspace()
    session = EditorSession(workspace)
    manager = HistoryManager(workspace)
    LocationRecorder(manager, session)
    hooks = TextualUIHooks(
        update_buffer=views.append,
        update_status=statuses.append,
        log=(logs.append if logs is not None else lambda line: None),
    )
    registry = load_default_commands(CommandRegistry())
    adapter = TextualHistoryAdapter(session, manager, registry, hooks)
    return adapter, session, manager


def test_printable_keys_insert_and_record() -> None:
    views: List[Optional[DocumentView]] = []
    statuses: List[str] = []
    adapter, session, manager = make_adapter(views, statuses)
    doc = session.open_document("a.txt")

    label = adapter.handle_textual_key("h", text="h")

    assert label == "insert"
    assert views[-1] == DocumentView(name="a.txt", text="h", point=2)
    assert statuses[-1] == "history: 1 back, 0 forward"
    assert manager.past == (LocationEntry(doc, 2),)


def test_bound_keys_run_history_actions() -> None:
    statuses: List[str] = []
    adapter, session, manager = make_adapter([], statuses)
    first = session.open_document("a.txt", "hello")
    second = session.open_document("b.txt", "world")
    adapter.handle_textual_key("x", text="x")

    adapter.handle_textual_key("tab")
    assert session.current == second

    label = adapter.handle_textual_key("alt+left")

    assert session.current_location() == LocationEntry(first, 2)
    assert label == "history: 1 back, 1 forward"
    assert adapter.handle_textual_key("alt+s") == label


def test_keys_without_document_are_ignored() -> None:
    views: List[Optional[DocumentView]] = []
    adapter, _session, _manager = make_adapter(views, [])

    assert adapter.handle_textual_key("x", text="x") == "no_document"
    assert views[-1] is None


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter, session, _manager = make_adapter([], [], logs)
    session.open_document("a.txt", "abc")

    adapter.handle_textual_key("right")
    adapter.handle_textual_key("f12")

    assert any(line.startswith("key -> 'right'") for line in logs)
    assert "status='ignored'" in logs[-1]


def test_demo_editor_wiring() -> None:
    from location_history.adapters.textual.app import SAMPLE_DOCUMENTS, create_editor
    from location_history.runtime import HistoryConfig

    session, manager, recorder = create_editor(HistoryConfig(min_distance=10))

    assert len(session.workspace) == len(SAMPLE_DOCUMENTS)
    assert manager.navigator is recorder
    assert session.document is not None
    assert session.document.name == "notes.txt"
    helper = session.workspace.find("*Messages*")
    assert helper is not None
    assert recorder.is_eligible(helper) is False

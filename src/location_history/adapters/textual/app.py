"""Executable Textual app demonstrating back/forward location history."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from location_history.commands import CommandRegistry, load_default_commands
from location_history.editor import EditorSession, Workspace
from location_history.history import HistoryManager
from location_history.recording import LocationRecorder
from location_history.runtime import HistoryConfig, telemetry

from .controller import DocumentView, TextualHistoryAdapter, TextualUIHooks

SAMPLE_DOCUMENTS = (
    ("notes.txt", "Scratch notes.\n" * 40),
    ("todo.txt", "- write tests\n- review history pruning\n" * 30),
    ("*Messages*", "Helper pane; never recorded.\n"),
)


def create_editor(
    config: Optional[HistoryConfig] = None,
) -> tuple[EditorSession, HistoryManager, LocationRecorder]:
    """Build a session wired to a history manager through a recorder."""

    config = config or HistoryConfig.from_env()
    workspace = Workspace()
    session = EditorSession(workspace)
    manager = HistoryManager(workspace, config=config)
    recorder = LocationRecorder(manager, session, config=config)
    for name, text in SAMPLE_DOCUMENTS:
        session.open_document(name, text)
    return session, manager, recorder


def _render(view: Optional[DocumentView]) -> str:
    if view is None:
        return "(no document)"
    index = view.point - 1
    return f"[{view.name}]\n{view.text[:index]}█{view.text[index:]}"


class LocationHistoryApp(App[None]):
    """Minimal Textual UI embedding an editor session with history."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[HistoryConfig] = None) -> None:
        super().__init__()
        self._config = config
        self.adapter: TextualHistoryAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        session, manager, _recorder = create_editor(self._config)
        registry = load_default_commands(
            CommandRegistry(logger_name="location_history.commands")
        )
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=lambda line: telemetry.record_event("ui.key", data={"line": line}),
        )
        self.adapter = TextualHistoryAdapter(session, manager, registry, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        text = event.character if event.is_printable else None
        self.adapter.handle_textual_key(event.key, text=text)
        event.stop()

    def _update_buffer(self, view: Optional[DocumentView]) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(_render(view))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the location history Textual demo."
    )
    parser.add_argument(
        "--min-distance",
        type=int,
        default=None,
        help="Offsets closer than this merge into one history entry",
    )
    parser.add_argument(
        "--max-length",
        type=int,
        default=None,
        help="Maximum number of backward history entries",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="telelog level for history events (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(level=args.log_level)
    overrides = {}
    if args.min_distance is not None:
        overrides["min_distance"] = args.min_distance
    if args.max_length is not None:
        overrides["max_history_length"] = args.max_length
    app = LocationHistoryApp(config=HistoryConfig.from_env(**overrides))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()

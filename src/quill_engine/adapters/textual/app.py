"""Executable Textual app that hosts the editor engine."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import VerticalScroll
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use quill_engine.adapters.textual.app"
    ) from exc

from rich.text import Text

from quill_engine.buffer import BufferMirror, PersistenceError
from quill_engine.keymaps import HELP_TEXT
from quill_engine.runtime import telemetry
from quill_engine.runtime.config import ConfigError, load_config
from quill_engine.session import EditorSession

from .controller import TextualEditorAdapter, TextualUIHooks


def render_buffer(mirror: BufferMirror, *, show_line_numbers: bool = True) -> Text:
    """Render lines with the cursor cell and selection highlighted."""

    lines = mirror.text.split("\n")
    width = len(str(len(lines)))
    selection = mirror.selection
    text = Text(no_wrap=True)
    for row, line in enumerate(lines):
        if show_line_numbers:
            text.append(f"{row + 1:>{width}} ", style="dim")
        cells = line + " "
        for col, char in enumerate(cells):
            style = ""
            if selection is not None and selection[0] <= (row, col) < selection[1]:
                style = "reverse blue"
            if (row, col) == mirror.cursor:
                style = "reverse"
            text.append(char, style=style)
        if row < len(lines) - 1:
            text.append("\n")
    return text


class QuillApp(App[None]):
    """Minimal Textual UI embedding the editor session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-area {
		height: 1fr;
	}

	#buffer-view {
		padding: 0 1;
	}

	#prompt-line {
		height: auto;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $accent;
		padding: 0 1;
	}

	#help-line {
		height: 1;
		padding: 0 1;
	}
	"""

    # Override the App's own ctrl+q/ctrl+c and tab focus cycling so the
    # session decides.
    BINDINGS = [
        Binding("ctrl+q", "editor_key('ctrl+q')", "Quit", priority=True),
        Binding("ctrl+c", "editor_key('ctrl+c')", "Copy", priority=True),
        Binding("tab", "editor_key('tab')", "Insert/Overwrite", priority=True, show=False),
    ]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._prompt_widget: Static | None = None

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._prompt_widget = Static("", id="prompt-line")
        self._status_widget = Static("", id="status-line")
        yield self._prompt_widget
        yield self._status_widget
        yield Static(HELP_TEXT, id="help-line")

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_prompt=self._show_prompt,
            request_exit=self.exit,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if self.adapter.submits_generation(event.key):
            # Generation blocks the event loop; paint the progress status first.
            event.stop()
            event.prevent_default()
            self.adapter.show_working()
            self.call_after_refresh(self.adapter.handle_key, event.key, text=event.character)
            return
        result = self.adapter.handle_key(event.key, text=event.character)
        if result.consumed:
            event.stop()
            event.prevent_default()

    def action_editor_key(self, key: str) -> None:
        if self.adapter:
            self.adapter.handle_key(key)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(
                render_buffer(
                    mirror,
                    show_line_numbers=self.session.config.editor.show_line_numbers,
                )
            )

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(Text(status))

    def _show_prompt(self, prompt: str) -> None:
        if self._prompt_widget:
            self._prompt_widget.update(Text(prompt))
            self._prompt_widget.display = bool(prompt)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal text editor with AI edits.")
    parser.add_argument("path", nargs="?", help="File to open (created on save)")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: $QUILL_CONFIG or ~/.quill.yaml)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset="production")
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"failed to load config: {exc}")
        return 1
    try:
        session = EditorSession.open(args.path, config=config)
    except PersistenceError as exc:
        print(f"failed to open file: {exc}")
        return 1
    try:
        QuillApp(session).run()
    finally:
        session.close()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())

"""Host-agnostic glue between a Textual app and an editor session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from quill_engine.buffer import BufferMirror
from quill_engine.keymaps import Dispatcher
from quill_engine.session import ActionResult, EditorSession

GENERATING_MESSAGE = "Generating AI response..."


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_prompt: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop


def status_line(mirror: BufferMirror, message: str = "") -> str:
    flag = "[+] " if mirror.modified else ""
    row, col = mirror.cursor
    status = f" {flag}{mirror.name} | Line {row + 1}/{mirror.line_count}, Col {col + 1}"
    if message:
        status += f" | {message}"
    return status


class TextualEditorAdapter:
    """Feeds key events to a ``Dispatcher`` and pushes state back to the host."""

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.dispatcher = dispatcher or Dispatcher(session)
        self.message = ""
        self._subscribe_events()
        self._refresh()

    def handle_key(self, key: str, *, text: Optional[str] = None) -> ActionResult:
        result = self.dispatcher.handle_key(key.lower(), text)
        if result.message is not None:
            self.message = result.message
        self._refresh()
        if not self.session.running:
            self.hooks.request_exit()
        return result

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "ai.working",
            "ai.done",
            "buffer.undo",
            "file.saved",
            "prompt.open",
            "prompt.close",
            "selection.toggle",
            "session.quit",
        ):
            bus.subscribe(event, lambda payload, name=event: self._handle_event(name, payload))

    def submits_generation(self, key: str) -> bool:
        """True when ``key`` would submit an open AI prompt."""

        prompt = self.dispatcher.prompt
        return (
            prompt is not None
            and prompt.request.kind == "generate"
            and key.lower() in {"enter", "return"}
        )

    def show_working(self) -> None:
        self.hooks.show_prompt("")
        self.hooks.update_status(
            status_line(self.session.buffer.mirror(), GENERATING_MESSAGE)
        )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.hooks.handle_event(name, payload)
        if name == "ai.working":
            self.show_working()

    def _refresh(self) -> None:
        mirror = self.session.buffer.mirror(attributes=self._attributes())
        self.hooks.update_buffer(mirror)
        self.hooks.update_status(status_line(mirror, self.message))
        prompt = self.dispatcher.prompt
        self.hooks.show_prompt(prompt.display if prompt is not None else "")

    def _attributes(self) -> Dict[str, str]:
        return {
            "mode": "INSERT" if self.session.insert_mode else "OVERWRITE",
            "selecting": str(self.session.buffer.selecting).lower(),
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "status_line"]

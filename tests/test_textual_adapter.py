from __future__ import annotations

from typing import List

from quill_engine.adapters.textual import TextualEditorAdapter, TextualUIHooks, status_line
from quill_engine.adapters.textual.controller import GENERATING_MESSAGE
from quill_engine.buffer import Buffer, BufferMirror
from quill_engine.runtime.config import Config
from quill_engine.session import EditorSession


class StaticGenerator:
    def generate(self, prompt: str, context: str) -> str:
        return "generated"


def make_session(text: str = "", *, ai_enabled: bool = False) -> EditorSession:
    config = Config()
    config.ai.enabled = ai_enabled
    return EditorSession(Buffer.from_text(text), config=config, generator=StaticGenerator())


def test_status_line_format() -> None:
    mirror = BufferMirror(
        text="a\nb",
        cursor=(1, 0),
        selection=None,
        line_count=2,
        modified=True,
        name="notes.txt",
    )

    assert status_line(mirror) == " [+] notes.txt | Line 2/2, Col 1"
    assert status_line(mirror, "Saved") == " [+] notes.txt | Line 2/2, Col 1 | Saved"


def test_adapter_pushes_buffer_and_status() -> None:
    mirrors: List[BufferMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=mirrors.append,
        update_status=statuses.append,
    )
    adapter = TextualEditorAdapter(make_session(), hooks)

    adapter.handle_key("h", text="h")
    adapter.handle_key("insert")

    assert mirrors[-1].text == "h"
    assert mirrors[-1].attributes["mode"] == "OVERWRITE"
    assert statuses[-1].endswith("| OVERWRITE mode")
    assert statuses[-1].startswith(" [+] [No Name]")


def test_adapter_shows_and_clears_prompt() -> None:
    prompts: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, show_prompt=prompts.append)
    adapter = TextualEditorAdapter(make_session("x"), hooks)

    adapter.handle_key("ctrl+g")
    adapter.handle_key("1", text="1")
    assert prompts[-1] == "Go to line: 1"

    adapter.handle_key("escape")
    assert prompts[-1] == ""


def test_adapter_reports_generation_progress() -> None:
    statuses: List[str] = []
    events: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        update_status=statuses.append,
        handle_event=lambda name, payload: events.append(name),
    )
    session = make_session("", ai_enabled=True)
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_key("ctrl+a")
    adapter.handle_key("ctrl+o")
    adapter.handle_key("w", text="w")
    adapter.handle_key("enter")

    assert any(status.endswith("Generating AI response...") for status in statuses)
    assert statuses[-1].endswith("Buffer overwritten with AI response")
    assert events == ["prompt.open", "prompt.close", "ai.working", "ai.done"]
    assert session.buffer.lines == ("generated",)


def test_adapter_requests_exit_on_quit() -> None:
    exits: List[bool] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None, request_exit=lambda: exits.append(True)
    )
    session = make_session("x")
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_key("y", text="y")
    adapter.handle_key("ctrl+q")
    assert exits == []

    adapter.handle_key("ctrl+q")
    assert exits == [True]
    assert session.running is False


def test_uppercase_key_names_are_normalised() -> None:
    hooks = TextualUIHooks(update_buffer=lambda mirror: None)
    session = make_session("abc")
    adapter = TextualEditorAdapter(session, hooks)

    result = adapter.handle_key("END")

    assert result.consumed
    assert session.buffer.cursor == (0, 3)


def test_generation_submit_is_detected_before_dispatch() -> None:
    statuses: List[str] = []
    prompts: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        update_status=statuses.append,
        show_prompt=prompts.append,
    )
    session = make_session("", ai_enabled=True)
    adapter = TextualEditorAdapter(session, hooks)

    assert adapter.submits_generation("enter") is False
    adapter.handle_key("ctrl+a")
    adapter.handle_key("w", text="w")
    assert adapter.submits_generation("w") is False
    assert adapter.submits_generation("Enter") is True

    adapter.show_working()

    assert statuses[-1].endswith(GENERATING_MESSAGE)
    assert prompts[-1] == ""
    assert session.buffer.lines == ("",)

    adapter.handle_key("enter")
    assert session.buffer.lines == ("", "generated")

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import httpx
import pytest

from quill_engine.ai import GenerationError, create_generator
from quill_engine.buffer import Buffer, Clipboard, FileStore
from quill_engine.keymaps import Dispatcher, UnknownActionError
from quill_engine.runtime.config import Config
from quill_engine.session import EditorSession


class EchoGenerator:
    def __init__(self, result: str = "generated", *, fail: bool = False) -> None:
        self.result = result
        self.fail = fail
        self.prompts: List[str] = []

    def generate(self, prompt: str, context: str) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise GenerationError("no response from API")
        return self.result


def make_session(
    text: str = "",
    *,
    ai_enabled: bool = False,
    generator: Optional[EchoGenerator] = None,
    store: Optional[FileStore] = None,
) -> EditorSession:
    config = Config()
    config.ai.enabled = ai_enabled
    return EditorSession(
        Buffer.from_text(text),
        config=config,
        generator=generator or EchoGenerator(),
        store=store,
    )


def press(dispatcher: Dispatcher, *keys: str):
    result = None
    for key in keys:
        if len(key) == 1:
            result = dispatcher.handle_key(key, key)
        else:
            result = dispatcher.handle_key(key)
    return result


def test_typing_and_enter_edit_the_buffer() -> None:
    session = make_session()
    dispatcher = Dispatcher(session)

    press(dispatcher, "H", "i", "enter", "B", "y", "e")

    assert session.buffer.lines == ("Hi", "Bye")
    assert len(session.undo) == 6


def test_overwrite_mode_replaces_characters() -> None:
    session = make_session("abc")
    dispatcher = Dispatcher(session)

    result = press(dispatcher, "insert")
    assert result.message == "OVERWRITE mode"
    press(dispatcher, "X", "Y")

    assert session.buffer.lines == ("XYc",)


def test_undo_reports_empty_history() -> None:
    session = make_session("abc")
    dispatcher = Dispatcher(session)

    assert press(dispatcher, "ctrl+z").message == "Nothing to undo"

    press(dispatcher, "end", "d")
    assert press(dispatcher, "ctrl+z").message == "Undo successful"
    assert session.buffer.lines == ("abc",)


def test_backspace_joins_lines() -> None:
    session = make_session("ab\ncd")
    dispatcher = Dispatcher(session)

    press(dispatcher, "down", "backspace")

    assert session.buffer.lines == ("abcd",)
    assert session.buffer.cursor == (0, 2)


def test_cut_and_paste_line() -> None:
    session = make_session("one\ntwo")
    dispatcher = Dispatcher(session)

    assert press(dispatcher, "ctrl+x").message == "Cut to internal clipboard"
    assert session.buffer.lines == ("two",)

    press(dispatcher, "end")
    assert press(dispatcher, "ctrl+v").message == "Pasted from internal clipboard"
    assert session.buffer.lines == ("twoone",)


def test_copy_prefers_host_clipboard_hooks() -> None:
    written: List[str] = []
    session = EditorSession(
        Buffer.from_text("line"),
        generator=EchoGenerator(),
        clipboard=Clipboard(reader=lambda: "host", writer=lambda text: written.append(text) or True),
    )
    dispatcher = Dispatcher(session)

    assert press(dispatcher, "ctrl+c").message == "Copied to clipboard"
    assert written == ["line"]
    press(dispatcher, "end", "ctrl+v")
    assert session.buffer.lines == ("linehost",)


def test_copy_uses_selection_when_present() -> None:
    session = make_session("hello world")
    dispatcher = Dispatcher(session)

    press(dispatcher, "ctrl+w", "right", "right")
    press(dispatcher, "ctrl+c")

    assert session.clipboard.text == "he"


def test_delete_line_goes_to_clipboard() -> None:
    session = make_session("a\nb")
    dispatcher = Dispatcher(session)

    assert press(dispatcher, "ctrl+k").message == "Line deleted (in clipboard)"
    assert session.clipboard.text == "a"
    assert session.buffer.lines == ("b",)


def test_movement_wraps_and_clamps() -> None:
    session = make_session("long line\nab")
    dispatcher = Dispatcher(session)

    press(dispatcher, "end", "down")
    assert session.buffer.cursor == (1, 2)
    press(dispatcher, "right")
    assert session.buffer.cursor == (1, 2)
    press(dispatcher, "home", "left")
    assert session.buffer.cursor == (0, 9)
    press(dispatcher, "right")
    assert session.buffer.cursor == (1, 0)
    press(dispatcher, "pageup")
    assert session.buffer.cursor == (0, 0)
    press(dispatcher, "ctrl+b")
    assert session.buffer.cursor == (1, 0)
    press(dispatcher, "ctrl+t")
    assert session.buffer.cursor == (0, 0)


def test_goto_line_prompt() -> None:
    session = make_session("\n".join(f"line {n}" for n in range(1, 31)))
    dispatcher = Dispatcher(session)

    result = press(dispatcher, "ctrl+g")
    assert result.prompt is not None
    assert dispatcher.prompt is not None

    result = press(dispatcher, "1", "2", "enter")
    assert result.message == "Jumped to line 12"
    assert session.buffer.cursor == (11, 0)
    assert dispatcher.prompt is None

    result = press(dispatcher, "ctrl+g", "x", "enter")
    assert result.message == "Invalid line number"

    press(dispatcher, "ctrl+g", "9", "9", "enter")
    assert session.buffer.cursor == (29, 0)


def test_save_with_store(tmp_path: Path) -> None:
    store = FileStore(tmp_path / "doc.txt")
    session = make_session("", store=store)
    dispatcher = Dispatcher(session)

    press(dispatcher, "o", "k")
    result = press(dispatcher, "ctrl+s")

    assert result.message == f"Saved to {store.name}"
    assert session.buffer.modified is False
    assert (tmp_path / "doc.txt").read_text(encoding="utf-8") == "ok"


def test_save_as_prompt(tmp_path: Path) -> None:
    session = make_session("text")
    dispatcher = Dispatcher(session)
    target = tmp_path / "a.txt"

    assert press(dispatcher, "ctrl+s").prompt is not None
    result = press(dispatcher, "escape")
    assert result.message == "Save cancelled"

    press(dispatcher, "ctrl+s")
    for char in str(target):
        dispatcher.handle_key(char, char)
    result = press(dispatcher, "enter")

    assert result.status == "saved"
    assert session.store is not None and session.store.path == target
    assert target.read_text(encoding="utf-8") == "text"


def test_save_failure_is_reported(tmp_path: Path) -> None:
    store = FileStore(tmp_path / "missing" / "doc.txt")
    session = make_session("x", store=store)
    session.buffer.insert_rune("y")

    result = Dispatcher(session).handle_key("ctrl+s")

    assert result.status == "error"
    assert result.message is not None and result.message.startswith("Error saving:")
    assert session.buffer.modified is True


def test_quit_requires_confirmation_when_modified() -> None:
    session = make_session("x")
    dispatcher = Dispatcher(session)
    press(dispatcher, "y")

    result = press(dispatcher, "ctrl+q")
    assert result.status == "quit_blocked"
    assert session.running is True

    press(dispatcher, "ctrl+q")
    assert session.running is False


def test_other_key_disarms_quit() -> None:
    session = make_session("x")
    dispatcher = Dispatcher(session)
    press(dispatcher, "y", "ctrl+q", "left", "ctrl+q")

    assert session.running is True


def test_unmodified_buffer_quits_immediately() -> None:
    session = make_session("x")
    press(Dispatcher(session), "ctrl+q")

    assert session.running is False


def test_format_json(tmp_path: Path) -> None:
    store = FileStore(tmp_path / "data.json")
    session = make_session('{"b": 1, "a": [1, 2]}', store=store)

    result = Dispatcher(session).handle_key("ctrl+f")

    assert result.message == "Formatted JSON"
    assert session.buffer.all_text() == json.dumps({"b": 1, "a": [1, 2]}, indent=2)
    assert len(session.undo) == 1


def test_format_invalid_json_is_untouched(tmp_path: Path) -> None:
    store = FileStore(tmp_path / "data.json")
    session = make_session("{broken", store=store)

    result = Dispatcher(session).handle_key("ctrl+f")

    assert result.status == "error"
    assert session.buffer.lines == ("{broken",)
    assert len(session.undo) == 0


def test_format_yaml(tmp_path: Path) -> None:
    store = FileStore(tmp_path / "data.yaml")
    session = make_session("a:   1\nb: [x, y]", store=store)

    result = Dispatcher(session).handle_key("ctrl+f")

    assert result.message == "Formatted YAML"
    assert session.buffer.lines == ("a: 1", "b:", "- x", "- y")


def test_format_unsupported_extension() -> None:
    result = Dispatcher(make_session("x")).handle_key("ctrl+f")

    assert result.status == "unsupported"


def test_ai_disabled_does_not_prompt() -> None:
    session = make_session("abc")
    dispatcher = Dispatcher(session)

    result = press(dispatcher, "ctrl+a")

    assert result.status == "ai_disabled"
    assert dispatcher.prompt is None


def test_ai_prompt_replace_mode() -> None:
    generator = EchoGenerator("a\nb")
    session = make_session("old", ai_enabled=True, generator=generator)
    dispatcher = Dispatcher(session)

    result = press(dispatcher, "ctrl+a")
    assert result.prompt is not None
    assert "[document]" in result.prompt.label

    press(dispatcher, "ctrl+r", "g", "o")
    assert dispatcher.prompt is not None
    assert dispatcher.prompt.display.endswith("[REPLACE] go")
    result = press(dispatcher, "enter")

    assert result.status == "ai_applied"
    assert generator.prompts == ["go"]
    assert session.buffer.lines == ("a", "b")
    assert session.buffer.cursor == (0, 0)


def test_ai_escape_cancels() -> None:
    generator = EchoGenerator()
    session = make_session("old", ai_enabled=True, generator=generator)
    dispatcher = Dispatcher(session)

    result = press(dispatcher, "ctrl+a", "x", "escape")

    assert result.message == "AI cancelled"
    assert generator.prompts == []


def test_ai_empty_prompt_reuses_last() -> None:
    generator = EchoGenerator("z")
    session = make_session("", ai_enabled=True, generator=generator)
    dispatcher = Dispatcher(session)

    press(dispatcher, "ctrl+a", "h", "i", "enter")
    press(dispatcher, "ctrl+a", "enter")

    assert generator.prompts == ["hi", "hi"]
    assert session.buffer.lines == ("", "z", "z")


def test_ai_failure_is_reported_without_changes() -> None:
    session = make_session("keep", ai_enabled=True, generator=EchoGenerator(fail=True))
    dispatcher = Dispatcher(session)

    result = press(dispatcher, "ctrl+a", "p", "enter")

    assert result.status == "ai_error"
    assert result.message == "AI error: no response from API"
    assert session.buffer.lines == ("keep",)
    assert len(session.undo) == 0


def test_unbound_key_is_not_consumed() -> None:
    result = Dispatcher(make_session()).handle_key("f12")

    assert result.consumed is False


def test_keymap_must_reference_known_actions() -> None:
    with pytest.raises(UnknownActionError):
        Dispatcher(make_session(), keymap={"f1": "does.not.exist"})


def test_open_missing_file_starts_empty(tmp_path: Path) -> None:
    session = EditorSession.open(tmp_path / "new.txt", generator=EchoGenerator())

    assert session.buffer.lines == ("",)
    assert session.store is not None


def test_tab_toggles_insert_mode() -> None:
    session = make_session("abc")
    dispatcher = Dispatcher(session)

    result = dispatcher.handle_key("tab", "\t")

    assert result.message == "OVERWRITE mode"
    assert session.insert_mode is False
    dispatcher.handle_key("tab", "\t")
    assert session.insert_mode is True


def test_tab_in_ai_prompt_selects_insert_mode() -> None:
    generator = EchoGenerator("new")
    session = make_session("old", ai_enabled=True, generator=generator)
    dispatcher = Dispatcher(session)

    press(dispatcher, "end", "ctrl+a", "ctrl+r")
    dispatcher.handle_key("tab", "\t")
    assert dispatcher.prompt is not None
    assert "[INSERT]" in dispatcher.prompt.display
    press(dispatcher, "p", "enter")

    assert session.insert_mode is True
    assert session.buffer.lines == ("old", "new")


def test_close_releases_http_client() -> None:
    config = Config()
    config.ai.enabled = True
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    session = EditorSession(
        Buffer(), config=config, generator=create_generator(config.ai, client=client)
    )

    session.close()

    assert client.is_closed


def test_close_tolerates_generators_without_resources() -> None:
    session = make_session()

    session.close()

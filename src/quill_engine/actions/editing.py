"""Typing, deletion, undo and mode toggles."""

from __future__ import annotations

from quill_engine.session import ActionResult, EditorSession


def type_character(session: EditorSession, char: str) -> ActionResult:
    session.save_undo("type")
    if session.insert_mode:
        session.buffer.insert_rune(char)
    else:
        session.buffer.overwrite_rune(char)
    return ActionResult(status="typed")


def newline(session: EditorSession) -> ActionResult:
    session.save_undo("newline")
    session.buffer.insert_newline()
    return ActionResult(status="newline")


def backspace(session: EditorSession) -> ActionResult:
    session.save_undo("backspace")
    changed = session.buffer.delete_backward()
    return ActionResult(status="deleted" if changed else "noop")


def delete_line(session: EditorSession) -> ActionResult:
    session.save_undo("delete_line")
    line = session.buffer.delete_current_line()
    session.clipboard.clipboard_set(line)
    return ActionResult(status="line_deleted", message="Line deleted (in clipboard)")


def undo(session: EditorSession) -> ActionResult:
    if not session.undo.undo(session.buffer):
        return ActionResult(status="undo_empty", message="Nothing to undo")
    session.bus.emit("buffer.undo", session.buffer.cursor)
    return ActionResult(status="undo", message="Undo successful")


def toggle_insert_mode(session: EditorSession) -> ActionResult:
    session.insert_mode = not session.insert_mode
    label = "INSERT" if session.insert_mode else "OVERWRITE"
    return ActionResult(status="insert_mode", message=f"{label} mode")


def toggle_selection(session: EditorSession) -> ActionResult:
    active = session.buffer.toggle_selection()
    session.bus.emit("selection.toggle", active)
    if active:
        return ActionResult(
            status="selection_on", message="Selection mode ON - move cursor to select"
        )
    return ActionResult(status="selection_off", message="Selection mode OFF")


__all__ = [
    "backspace",
    "delete_line",
    "newline",
    "toggle_insert_mode",
    "toggle_selection",
    "type_character",
    "undo",
]

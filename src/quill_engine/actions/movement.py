"""Cursor movement. Moving never mutates text and never needs undo."""

from __future__ import annotations

from quill_engine.buffer import Buffer
from quill_engine.session import ActionResult, EditorSession, PromptRequest

PAGE_SIZE = 10


def _moved(buffer: Buffer, row: int, col: int) -> ActionResult:
    buffer.set_cursor(row, col)
    return ActionResult(status="moved")


def cursor_up(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    if buffer.row == 0:
        return ActionResult(status="noop")
    return _moved(buffer, buffer.row - 1, buffer.col)


def cursor_down(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    if buffer.row >= buffer.document.line_count - 1:
        return ActionResult(status="noop")
    return _moved(buffer, buffer.row + 1, buffer.col)


def cursor_left(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    row, col = buffer.cursor
    if col > 0:
        return _moved(buffer, row, col - 1)
    if row > 0:
        return _moved(buffer, row - 1, len(buffer.document.get_line(row - 1)))
    return ActionResult(status="noop")


def cursor_right(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    row, col = buffer.cursor
    if col < len(buffer.current_line()):
        return _moved(buffer, row, col + 1)
    if row < buffer.document.line_count - 1:
        return _moved(buffer, row + 1, 0)
    return ActionResult(status="noop")


def line_start(session: EditorSession) -> ActionResult:
    return _moved(session.buffer, session.buffer.row, 0)


def line_end(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    return _moved(buffer, buffer.row, len(buffer.current_line()))


def page_up(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    return _moved(buffer, buffer.row - PAGE_SIZE, buffer.col)


def page_down(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    return _moved(buffer, buffer.row + PAGE_SIZE, buffer.col)


def jump_top(session: EditorSession) -> ActionResult:
    session.buffer.set_cursor(0, 0)
    return ActionResult(status="moved", message="Jumped to top")


def jump_bottom(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    buffer.set_cursor(buffer.document.line_count - 1, 0)
    return ActionResult(status="moved", message="Jumped to bottom")


def go_to_line(session: EditorSession) -> ActionResult:
    del session
    return ActionResult(
        status="prompt", prompt=PromptRequest(kind="goto_line", label="Go to line:")
    )


def complete_go_to_line(session: EditorSession, value: str) -> ActionResult:
    value = value.strip()
    if not value:
        return ActionResult(status="cancelled")
    try:
        line_number = int(value)
    except ValueError:
        return ActionResult(status="invalid", message="Invalid line number")
    row, _ = session.buffer.set_cursor(line_number - 1, 0)
    return ActionResult(status="moved", message=f"Jumped to line {row + 1}")


__all__ = [
    "complete_go_to_line",
    "cursor_down",
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "go_to_line",
    "jump_bottom",
    "jump_top",
    "line_end",
    "line_start",
    "page_down",
    "page_up",
]

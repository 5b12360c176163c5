"""Copy, cut and paste through the session clipboard."""

from __future__ import annotations

from quill_engine.session import ActionResult, EditorSession


def _where(to_host: bool) -> str:
    return "clipboard" if to_host else "internal clipboard"


def copy(session: EditorSession) -> ActionResult:
    buffer = session.buffer
    if buffer.has_selection():
        text = buffer.get_selection()
    else:
        text = buffer.current_line()
    to_host = session.clipboard.clipboard_set(text)
    return ActionResult(status="copied", message=f"Copied to {_where(to_host)}")


def cut(session: EditorSession) -> ActionResult:
    session.save_undo("cut")
    line = session.buffer.delete_current_line()
    to_host = session.clipboard.clipboard_set(line)
    return ActionResult(status="cut", message=f"Cut to {_where(to_host)}")


def paste(session: EditorSession) -> ActionResult:
    text, from_host = session.clipboard.clipboard_get()
    if not text:
        return ActionResult(status="noop", message="Clipboard is empty")
    session.save_undo("paste")
    session.buffer.insert_text(text)
    return ActionResult(status="pasted", message=f"Pasted from {_where(from_host)}")


__all__ = ["copy", "cut", "paste"]

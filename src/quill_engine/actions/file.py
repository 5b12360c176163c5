"""Saving and quitting."""

from __future__ import annotations

from quill_engine.buffer import FileStore, PersistenceError
from quill_engine.session import ActionResult, EditorSession, PromptRequest


def save(session: EditorSession) -> ActionResult:
    if session.store is None:
        return ActionResult(
            status="prompt", prompt=PromptRequest(kind="save_as", label="Save as:")
        )
    return _write(session, session.store)


def complete_save_as(session: EditorSession, value: str) -> ActionResult:
    path = value.strip()
    if not path:
        return ActionResult(status="cancelled", message="Save cancelled")
    return _write(session, FileStore(path))


def _write(session: EditorSession, store: FileStore) -> ActionResult:
    try:
        session.buffer.save(store)
    except PersistenceError as exc:
        return ActionResult(status="error", message=f"Error saving: {exc}")
    session.store = store
    session.bus.emit("file.saved", store.name)
    return ActionResult(status="saved", message=f"Saved to {store.name}")


def quit_editor(session: EditorSession) -> ActionResult:
    """Quit; a modified buffer needs the quit key twice in a row."""

    if session.buffer.modified and not session.quit_armed:
        session.quit_armed = True
        return ActionResult(
            status="quit_blocked",
            message="File modified! Press Ctrl+Q again to force quit or Ctrl+S to save",
        )
    session.running = False
    session.bus.emit("session.quit")
    return ActionResult(status="quit")


__all__ = ["complete_save_as", "quit_editor", "save"]

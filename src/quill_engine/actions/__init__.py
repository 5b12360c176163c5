"""High-level editing verbs bound to keys by the keymap."""

from typing import Callable, Dict

from quill_engine.session import ActionResult, EditorSession

from . import clipboard, editing, file, format, generate, movement
from .editing import type_character

Action = Callable[[EditorSession], ActionResult]

ACTION_TABLE: Dict[str, Action] = {
    "edit.newline": editing.newline,
    "edit.backspace": editing.backspace,
    "edit.delete_line": editing.delete_line,
    "edit.undo": editing.undo,
    "edit.toggle_insert": editing.toggle_insert_mode,
    "edit.toggle_selection": editing.toggle_selection,
    "clipboard.copy": clipboard.copy,
    "clipboard.cut": clipboard.cut,
    "clipboard.paste": clipboard.paste,
    "move.up": movement.cursor_up,
    "move.down": movement.cursor_down,
    "move.left": movement.cursor_left,
    "move.right": movement.cursor_right,
    "move.home": movement.line_start,
    "move.end": movement.line_end,
    "move.page_up": movement.page_up,
    "move.page_down": movement.page_down,
    "move.top": movement.jump_top,
    "move.bottom": movement.jump_bottom,
    "move.goto_line": movement.go_to_line,
    "file.save": file.save,
    "file.quit": file.quit_editor,
    "file.format": format.format_document,
    "ai.generate": generate.start_generation,
}

__all__ = [
    "ACTION_TABLE",
    "Action",
    "clipboard",
    "editing",
    "file",
    "format",
    "generate",
    "movement",
    "type_character",
]

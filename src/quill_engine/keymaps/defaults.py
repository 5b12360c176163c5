"""Default key bindings, keyed by host key names (``ctrl+s``, ``pageup``...)."""

from __future__ import annotations

from typing import Dict

DEFAULT_KEYMAP: Dict[str, str] = {
    "ctrl+s": "file.save",
    "ctrl+q": "file.quit",
    "ctrl+f": "file.format",
    "ctrl+c": "clipboard.copy",
    "ctrl+v": "clipboard.paste",
    "ctrl+x": "clipboard.cut",
    "ctrl+a": "ai.generate",
    "ctrl+w": "edit.toggle_selection",
    "ctrl+d": "edit.delete_line",
    "ctrl+k": "edit.delete_line",
    "ctrl+z": "edit.undo",
    "ctrl+i": "edit.toggle_insert",
    # Terminals deliver ctrl+i as tab.
    "tab": "edit.toggle_insert",
    "insert": "edit.toggle_insert",
    "ctrl+g": "move.goto_line",
    "ctrl+t": "move.top",
    "ctrl+b": "move.bottom",
    "enter": "edit.newline",
    "backspace": "edit.backspace",
    "up": "move.up",
    "down": "move.down",
    "left": "move.left",
    "right": "move.right",
    "home": "move.home",
    "end": "move.end",
    "pageup": "move.page_up",
    "pagedown": "move.page_down",
}

HELP_TEXT = (
    " ^S Save | ^Q Quit | ^K DelLine | ^Z Undo | ^T Top | ^B Bottom"
    " | ^I Insert/Ovr | ^G Goto | ^A AI | ^W Select | ^F Format"
)

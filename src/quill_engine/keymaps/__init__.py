"""Key bindings and key-event dispatch."""

from .defaults import DEFAULT_KEYMAP, HELP_TEXT
from .dispatcher import PROMPT_HANDLERS, Dispatcher, UnknownActionError

__all__ = [
    "DEFAULT_KEYMAP",
    "Dispatcher",
    "HELP_TEXT",
    "PROMPT_HANDLERS",
    "UnknownActionError",
]

"""Buffer abstractions: document, cursor/selection, undo and persistence."""

from .buffer import Buffer, Transaction
from .document import BufferDocument, split_lines
from .persistence import FileStore, PersistenceError
from .registers import Clipboard
from .state import BufferState, Cursor, Selection
from .sync import BufferMirror
from .undo import DEFAULT_UNDO_LIMIT, UndoEntry, UndoLog
from .validation import clamp_cursor, is_valid_cursor

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "Clipboard",
    "Cursor",
    "DEFAULT_UNDO_LIMIT",
    "FileStore",
    "PersistenceError",
    "Selection",
    "Transaction",
    "UndoEntry",
    "UndoLog",
    "clamp_cursor",
    "is_valid_cursor",
    "split_lines",
]

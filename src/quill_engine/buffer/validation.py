"""Coordinate normalization shared across buffer services.

Out-of-range positions are never an error here: they are pulled back into
the document.
"""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor


def clamp_row(document: BufferDocument, row: int) -> int:
    return max(0, min(row, document.line_count - 1))


def clamp_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    row = clamp_row(document, row)
    col = max(0, min(col, len(document.get_line(row))))
    return (row, col)


def is_valid_cursor(document: BufferDocument, cursor: Cursor) -> bool:
    return clamp_cursor(document, cursor) == cursor

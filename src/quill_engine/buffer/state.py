"""Cursor and selection state for a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = Tuple[int, int]  # (row, column)
Selection = Tuple[Cursor, Cursor]


@dataclass(slots=True)
class BufferState:
    """Cursor position plus the anchor of the selection, when one is active.

    The live selection is always ``(anchor, cursor)``; ``ordered_selection``
    returns it with the lexicographically smaller position first.
    """

    cursor: Cursor = (0, 0)
    selecting: bool = False
    anchor: Optional[Cursor] = None

    @property
    def row(self) -> int:
        return self.cursor[0]

    @property
    def col(self) -> int:
        return self.cursor[1]

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def start_selection(self) -> None:
        self.selecting = True
        self.anchor = self.cursor

    def clear_selection(self) -> None:
        self.selecting = False
        self.anchor = None

    def ordered_selection(self) -> Optional[Selection]:
        if not self.selecting or self.anchor is None:
            return None
        if self.anchor <= self.cursor:
            return self.anchor, self.cursor
        return self.cursor, self.anchor

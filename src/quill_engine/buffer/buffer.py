"""High-level buffer façade: document, cursor, selection and edit primitives."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional, Sequence

from quill_engine.runtime import telemetry

from .document import BufferDocument, split_lines
from .persistence import FileStore
from .state import BufferState, Cursor, Selection
from .sync import BufferMirror
from .validation import clamp_cursor


class Buffer:
    """One open document and its cursor.

    Edit primitives never raise for out-of-range coordinates: the cursor is
    normalized first (a row past the end appends a blank line for insertions,
    a column past the end is clamped). Callers that want undo must call
    ``UndoLog.save`` before invoking any mutating method.
    """

    def __init__(
        self,
        *,
        name: str = "[No Name]",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self._transaction: Optional[Transaction] = None

    @classmethod
    def from_text(cls, text: str, *, name: str = "[No Name]") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "[No Name]") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_lines(lines))

    @classmethod
    def open(cls, store: FileStore) -> "Buffer":
        """Load ``store`` into a new buffer; a missing file starts empty."""

        lines = store.load()
        buffer = cls(name=store.name, document=BufferDocument.from_lines(lines or [""]))
        return buffer

    # -- read-only accessors -------------------------------------------------

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def row(self) -> int:
        return self.state.row

    @property
    def col(self) -> int:
        return self.state.col

    @property
    def modified(self) -> bool:
        return self.document.modified

    def all_text(self) -> str:
        return self.document.text()

    def current_line(self) -> str:
        row = self.state.row
        if 0 <= row < self.document.line_count:
            return self.document.get_line(row)
        return ""

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.all_text(),
            cursor=self.state.cursor,
            selection=self.selection_range(),
            line_count=self.document.line_count,
            modified=self.document.modified,
            name=self.name,
            attributes=dict(attributes or {}),
        )

    # -- cursor --------------------------------------------------------------

    def set_cursor(self, row: int, col: int) -> Cursor:
        cursor = clamp_cursor(self.document, (row, col))
        self.state.set_cursor(*cursor)
        return cursor

    def clamp_cursor(self) -> Cursor:
        return self.set_cursor(*self.state.cursor)

    def _edit_position(self) -> Cursor:
        """Normalize the cursor for an insertion, extending past the end."""

        row, col = self.state.cursor
        row = max(0, row)
        if row >= self.document.line_count:
            row = self.document.append_line("")
        col = max(0, min(col, len(self.document.get_line(row))))
        self.state.set_cursor(row, col)
        return row, col

    # -- edit primitives -----------------------------------------------------

    def insert_rune(self, char: str) -> None:
        with Transaction(self, "insert_rune"):
            row, col = self._edit_position()
            line = self.document.get_line(row)
            self.document.set_line(row, line[:col] + char + line[col:])
            self.state.set_cursor(row, col + 1)

    def overwrite_rune(self, char: str) -> None:
        with Transaction(self, "overwrite_rune"):
            row, col = self._edit_position()
            line = self.document.get_line(row)
            self.document.set_line(row, line[:col] + char + line[col + 1 :])
            self.state.set_cursor(row, col + 1)

    def insert_newline(self) -> None:
        with Transaction(self, "insert_newline"):
            row, col = self._edit_position()
            line = self.document.get_line(row)
            self.document.update_lines(row, row + 1, [line[:col], line[col:]])
            self.state.set_cursor(row + 1, 0)

    def delete_backward(self) -> bool:
        """Backspace. Returns ``False`` at the start of the document."""

        row, col = self.state.cursor
        if row >= self.document.line_count or row < 0:
            return False
        line = self.document.get_line(row)
        col = min(col, len(line))
        if col > 0:
            with Transaction(self, "delete_backward"):
                self.document.set_line(row, line[: col - 1] + line[col:])
                self.state.set_cursor(row, col - 1)
            return True
        if row > 0:
            with Transaction(self, "join_lines"):
                previous = self.document.get_line(row - 1)
                self.document.update_lines(row - 1, row + 1, [previous + line])
                self.state.set_cursor(row - 1, len(previous))
            return True
        return False

    def delete_current_line(self) -> str:
        row = self.state.row
        if row >= self.document.line_count or row < 0:
            return ""
        with Transaction(self, "delete_line"):
            removed = self.document.remove_line(row)
            self.set_cursor(row, 0)
        return removed

    def insert_text(self, text: str) -> None:
        """Insert ``text`` exactly as if it had been typed."""

        with Transaction(self, "insert_text"):
            for index, segment in enumerate(split_lines(text)):
                if index > 0:
                    self.insert_newline()
                for char in segment:
                    self.insert_rune(char)

    def replace_current_line(self, text: str) -> None:
        row = self.state.row
        if row >= self.document.line_count or row < 0:
            return
        with Transaction(self, "replace_line"):
            self.document.set_line(row, text)
            self.state.set_cursor(row, len(text))

    def replace_all(self, text: str) -> None:
        """Swap the whole document for ``text`` and home the cursor."""

        with Transaction(self, "replace_all"):
            self.document.replace(split_lines(text))
            self.state.set_cursor(0, 0)

    def restore_lines(self, lines: Iterable[str]) -> None:
        with Transaction(self, "restore"):
            self.document.replace(lines)
            self.clamp_cursor()

    # -- selection -----------------------------------------------------------

    def toggle_selection(self) -> bool:
        """Enter or leave selection mode; returns the new state."""

        if self.state.selecting:
            self.state.clear_selection()
        else:
            self.state.start_selection()
        return self.state.selecting

    @property
    def selecting(self) -> bool:
        return self.state.selecting

    def clear_selection(self) -> None:
        self.state.clear_selection()

    def has_selection(self) -> bool:
        return self.state.selecting and self.state.anchor != self.state.cursor

    def selection_range(self) -> Optional[Selection]:
        """Normalized ``(start, end)``, clamped to the current document."""

        ordered = self.state.ordered_selection()
        if ordered is None:
            return None
        start, end = ordered
        return clamp_cursor(self.document, start), clamp_cursor(self.document, end)

    def get_selection(self) -> str:
        if not self.has_selection():
            return ""
        selection = self.selection_range()
        assert selection is not None
        (start_row, start_col), (end_row, end_col) = selection
        if start_row == end_row:
            return self.document.get_line(start_row)[start_col:end_col]
        parts = [self.document.get_line(start_row)[start_col:]]
        parts.extend(self.document.get_line(row) for row in range(start_row + 1, end_row))
        parts.append(self.document.get_line(end_row)[:end_col])
        return "\n".join(parts)

    def replace_selection(self, text: str) -> bool:
        """Splice ``text`` over the selected range.

        A zero-width range inserts ``text`` at that point. Returns ``False``
        without touching anything when selection mode is off.
        """

        selection = self.selection_range()
        if selection is None:
            return False
        (start_row, start_col), (end_row, end_col) = selection
        segments = split_lines(text)
        with Transaction(self, "replace_selection"):
            prefix = self.document.get_line(start_row)[:start_col]
            suffix = self.document.get_line(end_row)[end_col:]
            spliced = list(segments)
            spliced[0] = prefix + spliced[0]
            spliced[-1] = spliced[-1] + suffix
            self.document.update_lines(start_row, end_row + 1, spliced)
            if len(segments) == 1:
                self.state.set_cursor(start_row, start_col + len(text))
            else:
                self.state.set_cursor(start_row + len(segments) - 1, len(segments[-1]))
            self.state.clear_selection()
        return True

    # -- persistence ---------------------------------------------------------

    def save(self, store: FileStore) -> None:
        """Write through ``store``; ``modified`` is cleared only on success."""

        store.save(self.document.snapshot())
        self.name = store.name
        self.document.mark_saved()


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span around one buffer edit.

    Nested transactions (``insert_text`` driving ``insert_rune``) only open a
    span at the outermost level.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._outermost = False

    def __enter__(self) -> "Transaction":
        if self.buffer._transaction is None:
            self._outermost = True
            self.buffer._transaction = self
            self._span_cm = telemetry.span(
                name=f"buffer::{self.label}",
                component="buffer",
                metadata={"buffer": self.buffer.name},
            )
            self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._outermost:
            self.buffer._transaction = None
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]

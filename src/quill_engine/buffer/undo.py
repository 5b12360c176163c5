"""Bounded snapshot history used for undo."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, Optional, Tuple

from quill_engine.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover
    from .buffer import Buffer

DEFAULT_UNDO_LIMIT = 50


@dataclass(frozen=True, slots=True)
class UndoEntry:
    lines: Tuple[str, ...]
    label: str = "edit"


class UndoLog:
    """FIFO-bounded stack of whole-document snapshots.

    ``save`` must be called *before* the mutation it protects; the log does
    not observe the buffer on its own. There is no redo.
    """

    def __init__(self, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        if limit < 1:
            raise ValueError("undo limit must be at least 1")
        self.limit = limit
        self._entries: Deque[UndoEntry] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._entries)

    def can_undo(self) -> bool:
        return bool(self._entries)

    def save(self, buffer: "Buffer", *, label: str = "edit") -> None:
        self._entries.append(UndoEntry(lines=tuple(buffer.lines), label=label))
        telemetry.record_event(
            "undo.save", level="debug", data={"label": label, "depth": len(self._entries)}
        )

    def peek(self) -> Optional[UndoEntry]:
        return self._entries[-1] if self._entries else None

    def undo(self, buffer: "Buffer") -> bool:
        """Restore the most recent snapshot; ``False`` when there is none."""

        if not self._entries:
            telemetry.record_event("undo.empty", level="debug")
            return False
        entry = self._entries.pop()
        buffer.restore_lines(entry.lines)
        telemetry.record_event(
            "undo.restore",
            level="debug",
            data={"label": entry.label, "remaining": len(self._entries)},
        )
        return True

    def clear(self) -> None:
        self._entries.clear()

"""Core document storage for quill_engine buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


def split_lines(text: str) -> List[str]:
    """Split on line feeds only; ``""`` yields ``[""]``."""

    return text.split("\n")


@dataclass(slots=True)
class BufferDocument:
    """Mutable list-of-lines storage that is never empty.

    Every mutation bumps ``version`` and sets ``modified``; only a successful
    save clears the flag again (see ``mark_saved``).
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    modified: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=split_lines(text))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BufferDocument":
        return cls(_lines=list(lines))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def text(self) -> str:
        return "\n".join(self._lines)

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text
        self._touch()

    def insert_line(self, index: int, text: str) -> None:
        self._lines.insert(index, text)
        self._touch()

    def append_line(self, text: str = "") -> int:
        self._lines.append(text)
        self._touch()
        return len(self._lines) - 1

    def remove_line(self, index: int) -> str:
        """Remove and return line ``index``; the last line is blanked instead."""

        removed = self._lines[index]
        if len(self._lines) == 1:
            self._lines[0] = ""
        else:
            del self._lines[index]
        self._touch()
        return removed

    def update_lines(self, start: int, end: int, new_lines: Iterable[str]) -> None:
        """Replace ``[start:end]`` with ``new_lines``."""

        self._lines[start:end] = list(new_lines)
        if not self._lines:
            self._lines.append("")
        self._touch()

    def replace(self, lines: Iterable[str]) -> None:
        self._lines = list(lines) or [""]
        self._touch()

    def mark_saved(self) -> None:
        self.modified = False

    def _touch(self) -> None:
        self.version += 1
        self.modified = True

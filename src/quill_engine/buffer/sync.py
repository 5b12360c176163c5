"""Read-only views handed to renderers and other host collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Cursor, Selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: Cursor
    selection: Optional[Selection]
    line_count: int
    modified: bool
    name: str = "[No Name]"
    attributes: dict[str, str] = field(default_factory=dict)

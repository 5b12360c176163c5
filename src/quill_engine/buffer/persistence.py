"""File persistence: lines joined by a line feed, UTF-8 on disk."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from quill_engine.runtime import telemetry

from .document import split_lines


class PersistenceError(RuntimeError):
    """Raised when a file cannot be read or written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class FileStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    def load(self) -> Optional[List[str]]:
        """Return the file's lines, or ``None`` when it does not exist yet."""

        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"cannot read {self.path}: {exc}", path=self.path) from exc

        if raw.endswith("\n"):
            raw = raw[:-1]
        lines = split_lines(raw)
        telemetry.record_event(
            "file.load", level="debug", data={"path": str(self.path), "lines": len(lines)}
        )
        return lines

    def save(self, lines: Sequence[str]) -> None:
        try:
            self.path.write_text("\n".join(lines), encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"cannot write {self.path}: {exc}", path=self.path) from exc
        telemetry.record_event(
            "file.save", data={"path": str(self.path), "lines": len(lines)}
        )

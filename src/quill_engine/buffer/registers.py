"""Internal clipboard with host hooks for a system clipboard."""

from __future__ import annotations

from typing import Callable, Optional

ClipboardReader = Callable[[], Optional[str]]
ClipboardWriter = Callable[[str], bool]


class Clipboard:
    """Single text register.

    Hosts may plug in ``reader``/``writer`` callables for a system clipboard.
    Reads prefer the host clipboard when it returns non-empty text; writes
    always land in the internal register and report whether the host accepted
    them too.
    """

    def __init__(
        self,
        *,
        reader: Optional[ClipboardReader] = None,
        writer: Optional[ClipboardWriter] = None,
    ) -> None:
        self._text = ""
        self._reader = reader
        self._writer = writer

    @property
    def text(self) -> str:
        return self._text

    def clipboard_get(self) -> tuple[str, bool]:
        """Return ``(text, from_host)``."""

        if self._reader is not None:
            host_text = self._reader()
            if host_text:
                return host_text, True
        return self._text, False

    def clipboard_set(self, value: str) -> bool:
        self._text = value
        if self._writer is None:
            return False
        return bool(self._writer(value))

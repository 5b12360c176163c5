"""Single-line input collected by the host for prompting actions."""

from __future__ import annotations

from typing import Optional

from quill_engine.ai import GenerationMode

from .base import PromptRequest

# Only honoured while collecting a "generate" prompt.
MODE_KEYS = {
    "ctrl+i": GenerationMode.INSERT,
    "tab": GenerationMode.INSERT,
    "ctrl+r": GenerationMode.REPLACE,
    "ctrl+o": GenerationMode.OVERWRITE,
}


class PromptLine:
    def __init__(self, request: PromptRequest) -> None:
        self.request = request
        self.text = ""
        self.position = 0
        if request.kind == "generate" and request.mode is None:
            request.mode = GenerationMode.INSERT

    @property
    def display(self) -> str:
        label = self.request.label
        if self.request.mode is not None:
            label = f"{label} [{self.request.mode.value.upper()}]"
        return f"{label} {self.text}"

    def handle_key(self, key: str, text: Optional[str] = None) -> Optional[str]:
        """Feed one key; returns ``"submit"``, ``"cancel"`` or ``None``."""

        if key in {"enter", "return"}:
            return "submit"
        if key in {"escape", "esc"}:
            return "cancel"
        if self.request.kind == "generate" and key in MODE_KEYS:
            self.request.mode = MODE_KEYS[key]
        elif key == "backspace":
            if self.position > 0:
                self.text = self.text[: self.position - 1] + self.text[self.position :]
                self.position -= 1
        elif key == "left":
            self.position = max(0, self.position - 1)
        elif key == "right":
            self.position = min(len(self.text), self.position + 1)
        elif text and text.isprintable():
            self.text = self.text[: self.position] + text + self.text[self.position :]
            self.position += len(text)
        return None

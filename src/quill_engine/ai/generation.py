"""The text-generation capability as seen by the editor."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

SYSTEM_PROMPT = "You are a helpful code assistant. Provide concise responses."


class GenerationMode(str, Enum):
    """How a generated result lands in the buffer."""

    INSERT = "insert"
    REPLACE = "replace"
    OVERWRITE = "overwrite"


class GenerationError(RuntimeError):
    """Raised by generators when no usable text came back."""

    def __init__(self, message: str, *, provider: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class TextGenerator(Protocol):
    """``generate(prompt, context) -> text``; failures raise ``GenerationError``."""

    def generate(self, prompt: str, context: str) -> str:
        ...


def compose_prompt(prompt: str, context: str) -> str:
    if not context:
        return prompt
    return f"Context:\n{context}\n\nTask: {prompt}"


def chat_messages(prompt: str, context: str) -> list[dict[str, str]]:
    if not context:
        return [{"role": "user", "content": prompt}]
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": compose_prompt(prompt, context)},
    ]


__all__ = [
    "GenerationError",
    "GenerationMode",
    "SYSTEM_PROMPT",
    "TextGenerator",
    "chat_messages",
    "compose_prompt",
]

"""Applies generated text to a buffer as one undoable step."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple

from quill_engine.buffer import Buffer, UndoLog
from quill_engine.runtime import telemetry

from .generation import GenerationError, GenerationMode, TextGenerator

DEFAULT_HISTORY_LIMIT = 20


class PromptHistory:
    """Recent prompts, newest last, plus the prompt an empty entry reuses."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._entries: Deque[str] = deque(maxlen=limit)
        self.last: str = ""

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def resolve(self, prompt: str) -> Optional[str]:
        if prompt:
            return prompt
        return self.last or None

    def remember(self, prompt: str) -> None:
        self._entries.append(prompt)
        self.last = prompt


@dataclass(slots=True)
class GenerationRequest:
    prompt: str
    context: str
    mode: GenerationMode
    scope: str  # "selection" or "document"


@dataclass(slots=True)
class GenerationOutcome:
    status: str  # "applied", "cancelled" or "error"
    message: str
    request: Optional[GenerationRequest] = None

    @property
    def applied(self) -> bool:
        return self.status == "applied"


def gather_context(buffer: Buffer) -> Tuple[str, str]:
    """Return ``(context, scope)``: the selection if any, else the document."""

    if buffer.has_selection():
        return buffer.get_selection(), "selection"
    return buffer.all_text(), "document"


class GenerativeEditOrchestrator:
    """Prompt -> generator -> buffer, with no mutation unless generation succeeds.

    Session state (undo log, prompt history) is owned by the caller and passed
    in on every call.
    """

    def __init__(self, generator: TextGenerator, *, logger_name: str | None = None) -> None:
        self.generator = generator
        self._logger_name = logger_name

    def run(
        self,
        buffer: Buffer,
        prompt: str,
        mode: GenerationMode | str,
        *,
        undo: UndoLog,
        history: PromptHistory,
    ) -> GenerationOutcome:
        mode = GenerationMode(mode)
        context, scope = gather_context(buffer)

        resolved = history.resolve(prompt)
        if resolved is None:
            return GenerationOutcome(status="cancelled", message="AI cancelled - no prompt")
        history.remember(resolved)

        request = GenerationRequest(prompt=resolved, context=context, mode=mode, scope=scope)
        telemetry.record_event(
            "ai.request",
            data={"mode": mode.value, "scope": scope, "context_chars": len(context)},
            logger_name=self._logger_name,
        )
        try:
            result = self.generator.generate(resolved, context)
        except GenerationError as exc:
            telemetry.record_event(
                "ai.failed",
                level="warning",
                data={"mode": mode.value, "error": str(exc)},
                logger_name=self._logger_name,
            )
            return GenerationOutcome(status="error", message=f"AI error: {exc}", request=request)

        undo.save(buffer, label=f"ai_{mode.value}")
        message = self._apply(buffer, result, mode)
        buffer.clear_selection()
        return GenerationOutcome(status="applied", message=message, request=request)

    @staticmethod
    def _apply(buffer: Buffer, result: str, mode: GenerationMode) -> str:
        if mode is GenerationMode.REPLACE:
            if buffer.has_selection():
                buffer.replace_selection(result)
                return "Selection replaced with AI response"
            buffer.replace_all(result)
            return "Document replaced with AI response"
        if mode is GenerationMode.OVERWRITE:
            buffer.replace_all(result)
            return "Buffer overwritten with AI response"
        buffer.insert_text("\n" + result)
        return "AI response inserted"


__all__ = [
    "GenerationOutcome",
    "GenerationRequest",
    "GenerativeEditOrchestrator",
    "PromptHistory",
    "gather_context",
]

"""Result and event types shared by session actions and hosts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from quill_engine.ai import GenerationMode


@dataclass(slots=True)
class PromptRequest:
    """Asks the host for one line of input before an action can finish."""

    kind: str  # "save_as", "goto_line" or "generate"
    label: str
    mode: Optional[GenerationMode] = None


@dataclass(slots=True)
class ActionResult:
    """Returned by every session action."""

    consumed: bool = True
    status: str = "ok"
    message: Optional[str] = None
    prompt: Optional[PromptRequest] = None


class SessionBus:
    """Minimal event bus letting hosts observe session activity."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["ActionResult", "PromptRequest", "SessionBus"]

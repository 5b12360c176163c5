"""Editing session state and the types its actions exchange."""

from .base import ActionResult, PromptRequest, SessionBus
from .prompt_line import PromptLine
from .session import EditorSession

__all__ = [
    "ActionResult",
    "EditorSession",
    "PromptLine",
    "PromptRequest",
    "SessionBus",
]

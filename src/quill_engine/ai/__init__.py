"""Generative edits: provider backends and the buffer-facing orchestrator."""

from .generation import (
    GenerationError,
    GenerationMode,
    TextGenerator,
    chat_messages,
    compose_prompt,
)
from .orchestrator import (
    GenerationOutcome,
    GenerationRequest,
    GenerativeEditOrchestrator,
    PromptHistory,
    gather_context,
)
from .providers import (
    ChatCompletionsGenerator,
    DisabledGenerator,
    OllamaGenerator,
    OpenRouterGenerator,
    create_generator,
)

__all__ = [
    "ChatCompletionsGenerator",
    "DisabledGenerator",
    "GenerationError",
    "GenerationMode",
    "GenerationOutcome",
    "GenerationRequest",
    "GenerativeEditOrchestrator",
    "OllamaGenerator",
    "OpenRouterGenerator",
    "PromptHistory",
    "TextGenerator",
    "chat_messages",
    "compose_prompt",
    "create_generator",
    "gather_context",
]

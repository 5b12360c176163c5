"""Generative edit entry points."""

from __future__ import annotations

from quill_engine.ai import GenerationMode, gather_context
from quill_engine.session import ActionResult, EditorSession, PromptRequest


def start_generation(session: EditorSession) -> ActionResult:
    if not session.ai_enabled:
        return ActionResult(
            status="ai_disabled", message="AI disabled. Edit the config file to enable"
        )
    _, scope = gather_context(session.buffer)
    label = f"AI Prompt [{scope}] (^I=insert ^R=replace ^O=overwrite):"
    return ActionResult(
        status="prompt",
        prompt=PromptRequest(kind="generate", label=label, mode=GenerationMode.INSERT),
    )


def complete_generation(
    session: EditorSession, prompt: str, mode: GenerationMode | str = GenerationMode.INSERT
) -> ActionResult:
    session.bus.emit("ai.working", prompt)
    outcome = session.orchestrator.run(
        session.buffer,
        prompt.strip(),
        mode,
        undo=session.undo,
        history=session.prompts,
    )
    session.bus.emit("ai.done", outcome)
    return ActionResult(status=f"ai_{outcome.status}", message=outcome.message)


__all__ = ["complete_generation", "start_generation"]

"""Routes host key events to session actions or the open prompt line."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

from quill_engine.actions import ACTION_TABLE, Action, type_character
from quill_engine.actions.file import complete_save_as
from quill_engine.actions.generate import complete_generation
from quill_engine.actions.movement import complete_go_to_line
from quill_engine.ai import GenerationMode
from quill_engine.runtime import telemetry
from quill_engine.session import ActionResult, EditorSession, PromptLine, PromptRequest

from .defaults import DEFAULT_KEYMAP

PromptHandler = Callable[[EditorSession, str, PromptRequest], ActionResult]

_CANCEL_MESSAGES = {
    "save_as": "Save cancelled",
    "generate": "AI cancelled",
}


def _finish_generate(session: EditorSession, value: str, request: PromptRequest) -> ActionResult:
    return complete_generation(session, value, request.mode or GenerationMode.INSERT)


PROMPT_HANDLERS: Dict[str, PromptHandler] = {
    "save_as": lambda session, value, request: complete_save_as(session, value),
    "goto_line": lambda session, value, request: complete_go_to_line(session, value),
    "generate": _finish_generate,
}


class UnknownActionError(KeyError):
    """Raised when a keymap points at an action that is not registered."""


class Dispatcher:
    """Owns the keymap and the (at most one) open prompt line."""

    def __init__(
        self,
        session: EditorSession,
        *,
        keymap: Optional[Mapping[str, str]] = None,
        actions: Optional[Mapping[str, Action]] = None,
    ) -> None:
        self.session = session
        self.keymap: Dict[str, str] = dict(DEFAULT_KEYMAP if keymap is None else keymap)
        self.actions: Dict[str, Action] = dict(ACTION_TABLE if actions is None else actions)
        self.prompt: Optional[PromptLine] = None
        missing = sorted(set(self.keymap.values()) - set(self.actions))
        if missing:
            raise UnknownActionError(f"Keymap references unknown actions: {missing}")

    def handle_key(self, key: str, text: Optional[str] = None) -> ActionResult:
        if self.prompt is not None:
            return self._handle_prompt_key(key, text)

        action_id = self.keymap.get(key)
        if action_id is None:
            if text and len(text) == 1 and text.isprintable():
                return self._run("edit.type", lambda session: type_character(session, text))
            return ActionResult(consumed=False, status="unbound")
        return self._run(action_id, self.actions[action_id])

    def _run(self, action_id: str, action: Action) -> ActionResult:
        if action_id != "file.quit":
            self.session.quit_armed = False
        with telemetry.span(
            f"action::{action_id}",
            component="actions",
            metadata={"action": action_id, "cursor": self.session.buffer.cursor},
        ):
            result = action(self.session)
        if result.prompt is not None:
            self.prompt = PromptLine(result.prompt)
            self.session.bus.emit("prompt.open", result.prompt)
        return result

    def _handle_prompt_key(self, key: str, text: Optional[str]) -> ActionResult:
        assert self.prompt is not None
        prompt = self.prompt
        outcome = prompt.handle_key(key, text)
        if outcome is None:
            return ActionResult(status="prompt_edit")

        self.prompt = None
        request = prompt.request
        self.session.bus.emit("prompt.close", request)
        if outcome == "cancel":
            return ActionResult(status="cancelled", message=_CANCEL_MESSAGES.get(request.kind))
        handler = PROMPT_HANDLERS[request.kind]
        with telemetry.span(
            f"prompt::{request.kind}", component="actions", metadata={"kind": request.kind}
        ):
            return handler(self.session, prompt.text, request)


__all__ = ["Dispatcher", "PROMPT_HANDLERS", "UnknownActionError"]

"""Explicit per-session editor state."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from quill_engine.ai import (
    GenerativeEditOrchestrator,
    PromptHistory,
    TextGenerator,
    create_generator,
)
from quill_engine.buffer import Buffer, Clipboard, FileStore, UndoLog
from quill_engine.runtime import telemetry
from quill_engine.runtime.config import Config

from .base import SessionBus


class EditorSession:
    """Everything one editing session owns.

    This is the layer that honours the undo contract: every action calls
    ``save_undo`` before it mutates ``buffer``.
    """

    def __init__(
        self,
        buffer: Buffer,
        *,
        config: Optional[Config] = None,
        generator: Optional[TextGenerator] = None,
        store: Optional[FileStore] = None,
        clipboard: Optional[Clipboard] = None,
        bus: Optional[SessionBus] = None,
    ) -> None:
        self.config = config or Config()
        self.buffer = buffer
        self.store = store
        self.undo = UndoLog(self.config.editor.undo_limit)
        self.prompts = PromptHistory(self.config.editor.prompt_history_limit)
        self.clipboard = clipboard or Clipboard()
        self.bus = bus or SessionBus()
        self.orchestrator = GenerativeEditOrchestrator(
            generator or create_generator(self.config.ai),
            logger_name="quill_engine.ai",
        )
        self.insert_mode = True
        self.running = True
        self.quit_armed = False

    @classmethod
    def open(
        cls,
        path: str | Path | None = None,
        *,
        config: Optional[Config] = None,
        generator: Optional[TextGenerator] = None,
        clipboard: Optional[Clipboard] = None,
    ) -> "EditorSession":
        """Start a session on ``path`` (a missing file is a new, empty file)."""

        if path is None:
            return cls(Buffer(), config=config, generator=generator, clipboard=clipboard)
        store = FileStore(path)
        buffer = Buffer.open(store)
        telemetry.record_event(
            "session.open",
            data={"path": store.name, "lines": buffer.document.line_count},
        )
        return cls(
            buffer,
            config=config,
            generator=generator,
            store=store,
            clipboard=clipboard,
        )

    @property
    def ai_enabled(self) -> bool:
        return self.config.ai.enabled

    def save_undo(self, label: str = "edit") -> None:
        self.undo.save(self.buffer, label=label)

    def close(self) -> None:
        """Release the generator's resources (its HTTP client, if any)."""

        close = getattr(self.orchestrator.generator, "close", None)
        if close is not None:
            close()

"""Textual host for the editor engine."""

from .controller import TextualEditorAdapter, TextualUIHooks, status_line

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "status_line"]

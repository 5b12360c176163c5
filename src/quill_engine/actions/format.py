"""Reformat structured documents in place, chosen by file extension."""

from __future__ import annotations

import json
from pathlib import PurePath
from typing import Callable, Dict

import yaml

from quill_engine.session import ActionResult, EditorSession


def format_json(text: str) -> str:
    return json.dumps(json.loads(text), indent=2, ensure_ascii=False)


def format_yaml(text: str) -> str:
    data = yaml.safe_load(text)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip("\n")


_FORMATTERS: Dict[str, tuple[str, Callable[[str], str]]] = {
    ".json": ("JSON", format_json),
    ".yaml": ("YAML", format_yaml),
    ".yml": ("YAML", format_yaml),
}


def format_document(session: EditorSession) -> ActionResult:
    name = session.store.name if session.store else session.buffer.name
    entry = _FORMATTERS.get(PurePath(name).suffix.lower())
    if entry is None:
        return ActionResult(
            status="unsupported", message="Format supports JSON and YAML files"
        )
    label, formatter = entry
    try:
        formatted = formatter(session.buffer.all_text())
    except (ValueError, yaml.YAMLError) as exc:
        return ActionResult(status="error", message=f"{label} format error: {exc}")

    session.save_undo("format")
    session.buffer.replace_all(formatted)
    return ActionResult(status="formatted", message=f"Formatted {label}")


__all__ = ["format_document", "format_json", "format_yaml"]

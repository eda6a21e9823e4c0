"""Loaders for grammar files and alias tables."""

from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, List


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_aliases(path: str) -> Dict[str, List[str]]:
    """Read a JSON object of canonical token -> alias (string or list of strings).

        {"knight": ["night"], "4": ["for", "fore"], "h": "age"}
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    out: Dict[str, List[str]] = {}
    for key, raw in data.items():
        forms = [raw] if isinstance(raw, str) else raw
        if not isinstance(forms, list) or not all(isinstance(f, str) for f in forms):
            raise ValueError(f"{path}: aliases for {key!r} must be a string or a list of strings")
        out[key] = forms
    return out

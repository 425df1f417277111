from __future__ import annotations
import json
import re
from typing import Any, Optional

FENCE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?|\n?```\s*$")

_CLOSERS = {"[": "]", "{": "}"}


def _strip_fences(text: str) -> str:
    return FENCE.sub("", text.strip()).strip()


def _balanced_blocks(text: str, opener: str):
    """Yield every substring that starts at `opener` and ends at its matching closer."""
    closer = _CLOSERS[opener]
    start = text.find(opener)
    while start != -1:
        depth = 0
        in_str = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_str:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_str = False
                continue
            if ch == '"':
                in_str = True
            elif ch in "[{":
                depth += 1
            elif ch in "]}":
                depth -= 1
                if depth == 0:
                    if ch == closer:
                        yield text[start:i + 1]
                    break
        start = text.find(opener, start + 1)


def extract_json(text: str, kind: type) -> Optional[Any]:
    """
    Parse a JSON value of type `kind` (list or dict) out of a model response.

    The whole trimmed response is tried first; when that fails, the text is
    scanned for the first balanced block of the right kind that parses.
    Returns None when nothing usable is found.
    """
    if not text:
        return None
    cleaned = _strip_fences(text)
    try:
        value = json.loads(cleaned)
        if isinstance(value, kind):
            return value
    except ValueError:
        pass

    opener = "[" if kind is list else "{"
    for block in _balanced_blocks(cleaned, opener):
        try:
            value = json.loads(block)
        except ValueError:
            continue
        if isinstance(value, kind):
            return value
    return None

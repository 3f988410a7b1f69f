"""Key case conversion between Python keyword names and platform wire keys.

LINE expects camelCase JSON keys while Python callers pass snake_case
keyword options. Digits stay glued to the word before them:
``image_1024`` -> ``image1024``, ``has_2fa`` -> ``has2fa``.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _words(value: str) -> List[str]:
    words: List[str] = []
    for chunk in _SEPARATORS.split(value):
        if chunk:
            words.extend(w for w in _CASE_BOUNDARY.split(chunk) if w)
    return words


def camelcase(value: str) -> str:
    """Convert ``my_key`` / ``has_2fa`` to ``myKey`` / ``has2fa``."""
    parts: List[str] = []
    for part in value.split("_"):
        if parts and part[:1].isdigit():
            parts[-1] += part
        else:
            parts.append(part)
    words = _words("_".join(parts))
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail)


def _map_keys(obj: Any, convert: Callable[[str], str], deep: bool) -> Any:
    if isinstance(obj, dict):
        return {
            convert(key) if isinstance(key, str) else key: (
                _map_keys(val, convert, deep) if deep else val
            )
            for key, val in obj.items()
        }
    if deep and isinstance(obj, list):
        return [_map_keys(item, convert, deep) for item in obj]
    return obj


def camelcase_keys(obj: Dict[str, Any], deep: bool = False) -> Dict[str, Any]:
    return _map_keys(obj, camelcase, deep)

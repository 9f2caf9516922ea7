# hotboot/core/dictpath.py
from __future__ import annotations
from typing import Any
from collections.abc import Mapping

__all__ = ["getByPath"]



# ----------------------------------------------
#                  path parsing
# ----------------------------------------------

def _splitPathWithEscapes(path: str) -> list[str]:
    """
    Splits a dotted/slashed path where '.' and '/' are segment separators,
    and backslash '\\' escapes the next character (including separators).

    Examples:
      - a.b.c   -> ["a", "b", "c"]
      - a\\.b/c -> ["a.b", "c"]
    """
    parts: list[str] = []
    curr: list[str] = []
    esc = False
    for ch in path or "":
        if esc:
            curr.append(ch)
            esc = False
            continue
        if ch == "\\":
            esc = True
            continue
        if ch in (".", "/"):
            parts.append("".join(curr))
            curr = []
            continue
        curr.append(ch)
    if esc:
        raise ValueError("Path ends with a dangling escape (trailing backslash)")
    parts.append("".join(curr))
    return parts



def _validatePathParts(original: str, parts: list[str]) -> None:
    if not isinstance(original, str) or not original:
        raise ValueError("Path must be a non-empty string")
    if not parts or any(part == "" for part in parts):
        raise ValueError(f"Path '{original}' contains empty segment(s)")



# ----------------------------------------------
#                   Public API
# ----------------------------------------------

def getByPath(obj: Any, path: str, default: Any | None = None) -> Any:
    """
    Returns the value at `path` from `obj` if reachable. When the chain
    cannot be resolved, returns `default`.

    Resolution rules per hop:
      • if current is a mapping and key exists → descend by key
      • else → try getattr (covers pydantic models)
      • invalid path/failure → return default
    """
    try:
        parts = _splitPathWithEscapes(path)
        _validatePathParts(path, parts)
    except ValueError:
        # Invalid path is treated as "not found"
        return default

    current: Any = obj
    for part in parts:
        if isinstance(current, Mapping) and part in current:
            current = current[part]
            continue
        if not isinstance(current, Mapping) and hasattr(current, part):
            try:
                current = getattr(current, part)
                continue
            except Exception:
                return default
        return default
    return current

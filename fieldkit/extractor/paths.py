"""Dot-path navigation over parsed response documents.

Paths look like ``fields.customfield_10046``. A literal dot inside a key is
written ``\\.`` and a literal backslash ``\\\\``, so any field identifier can be
addressed.
"""
from typing import Any, List


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def escape_path_segment(segment: str) -> str:
    """Escape one key so it stays a single path segment."""
    return segment.replace("\\", "\\\\").replace(".", "\\.")


def join_path(*segments: str) -> str:
    return ".".join(escape_path_segment(segment) for segment in segments)


def split_path(path: str) -> List[str]:
    """Split a dot path on unescaped dots and unescape each segment."""
    parts: List[str] = []
    buf: List[str] = []
    escaping = False

    for ch in path:
        if escaping:
            buf.append(ch)
            escaping = False
        elif ch == "\\":
            escaping = True
        elif ch == ".":
            parts.append("".join(buf))
            buf = []
        else:
            buf.append(ch)

    if escaping:
        # Trailing backslash; treat as literal.
        buf.append("\\")

    parts.append("".join(buf))
    return [p for p in parts if p != ""]


def lookup(data: Any, path: str) -> Any:
    """
    Return the value at path, or MISSING when any segment is absent

    Traversal only descends into dicts; an explicit JSON null is returned as
    None, which is distinct from MISSING.
    """
    value = data
    for key in split_path(path):
        if not isinstance(value, dict) or key not in value:
            return MISSING
        value = value[key]
    return value

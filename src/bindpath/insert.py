"""Insertion policy — compose a chosen path back into the edited value."""

from __future__ import annotations

from .resolve import CLOSE, OPEN


def binding_token(path: str) -> str:
    return f"{OPEN}{path}{CLOSE}"


def replace_fragment(value: str, start: int, cursor: int, path: str) -> tuple[str, int]:
    """Replace ``value[start:cursor]`` (an open ``{{fragment``) with ``{{path}}``.

    Returns the new value and the cursor position just after the inserted token.
    """
    start = max(0, min(start, len(value)))
    cursor = max(start, min(cursor, len(value)))
    token = binding_token(path)
    return value[:start] + token + value[cursor:], start + len(token)


def append_binding(value: str, path: str) -> str:
    """Append ``{{path}}`` to ``value`` with no separator."""
    return (value or "") + binding_token(path)

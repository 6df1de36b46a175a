"""Resolver — substitute {{path}} bindings in strings and nested prop trees."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from .settings import BindingSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

OPEN = "{{"
CLOSE = "}}"

# never traversed, even when present as keys
BLOCKED_KEYS = frozenset({"__proto__", "prototype", "constructor"})

_BRACKET_INDEX = re.compile(r"\[\s*(\d+)\s*\]")

_UNRESOLVED = object()


def parse_path(expr: str) -> list[str]:
    """Split a dot-path into segments; ``items[0].name`` is ``items.0.name``."""
    expr = _BRACKET_INDEX.sub(r".\1", expr.strip())
    return [part.strip() for part in expr.split(".") if part.strip()]


def lookup(data: Any, path: str | Sequence[str]) -> Any:
    """Walk ``data`` along ``path``; return the value or the unresolved sentinel.

    Use :func:`is_resolved` to tell the two apart, since ``None`` is a valid
    terminal value.
    """
    parts = parse_path(path) if isinstance(path, str) else list(path)
    if not parts:
        return _UNRESOLVED

    current = data
    for part in parts:
        if current is None or part in BLOCKED_KEYS:
            return _UNRESOLVED
        if isinstance(current, Mapping):
            if part not in current:
                return _UNRESOLVED
            current = current[part]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not (part.isascii() and part.isdigit()):
                return _UNRESOLVED
            index = int(part)
            if index >= len(current):
                return _UNRESOLVED
            current = current[index]
        else:
            return _UNRESOLVED
    return current


def is_resolved(value: Any) -> bool:
    return value is not _UNRESOLVED


def stringify(value: Any) -> str:
    """Render a resolved value the way it appears in document text."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    except (ValueError, TypeError, RecursionError):
        return str(value)


class Resolver:
    """Resolve {{...}} bindings against a single sample-data tree.

    A resolver built without data is a pass-through: strings and prop trees
    come back untouched, literal tokens included.
    """

    def __init__(self, data: Any = None, *, settings: BindingSettings | None = None) -> None:
        self._data = data
        self._settings = settings or BindingSettings()

    @property
    def data(self) -> Any:
        return self._data

    @property
    def has_data(self) -> bool:
        return self._data is not None

    def _resolve_token(self, expr: str) -> str:
        value = lookup(self._data, expr)
        if not is_resolved(value):
            logger.debug("Unresolved binding '%s'", expr.strip())
            return ""
        return stringify(value)

    def resolve_text(self, text: str) -> str:
        """Substitute every complete {{...}} token in ``text``."""
        if not self.has_data or not isinstance(text, str) or OPEN not in text:
            return text

        out: list[str] = []
        pos = 0
        while pos < len(text):
            start = text.find(OPEN, pos)
            if start == -1:
                break
            end = text.find(CLOSE, start + len(OPEN))
            if end == -1:
                # no closer anywhere after this point; copy the rest verbatim
                break
            out.append(text[pos:start])
            out.append(self._resolve_token(text[start + len(OPEN) : end]))
            pos = end + len(CLOSE)
        out.append(text[pos:])
        return "".join(out)

    def resolve(self, node: Any) -> Any:
        """Recursively resolve every string leaf of ``node``, preserving shape."""
        if not self.has_data:
            return node
        try:
            return self._walk(node, 0)
        except RecursionError:
            logger.warning("Prop tree too deep to resolve; leaving it unresolved")
            return node

    def _walk(self, obj: Any, depth: int) -> Any:
        if isinstance(obj, str):
            return self.resolve_text(obj)
        if depth >= self._settings.max_resolve_depth:
            if isinstance(obj, (Mapping, list, tuple)):
                logger.warning("Nesting exceeds %d levels; leaving subtree unresolved", depth)
            return obj
        if isinstance(obj, Mapping):
            return {k: self._walk(v, depth + 1) for k, v in obj.items()}
        if isinstance(obj, list):
            return [self._walk(item, depth + 1) for item in obj]
        if isinstance(obj, tuple):
            return tuple([self._walk(item, depth + 1) for item in obj])
        return obj


def resolve(text: str, data: Any = None) -> str:
    """Substitute {{path}} tokens in ``text``; a no-op when ``data`` is None."""
    return Resolver(data).resolve_text(text)


def resolve_deep(node: T, data: Any = None, *, settings: BindingSettings | None = None) -> T:
    """Resolve every string leaf of ``node``; a no-op when ``data`` is None."""
    return Resolver(data, settings=settings).resolve(node)

"""Lazily expanded path index over a sample-data tree."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .resolve import BLOCKED_KEYS, is_resolved, lookup, parse_path

logger = logging.getLogger(__name__)


class NodeKind(StrEnum):
    BRANCH = "branch"
    LEAF = "leaf"


@dataclass(frozen=True)
class PathNode:
    """One row of the path explorer."""

    path: str
    label: str
    kind: NodeKind
    depth: int
    type_name: str = ""

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def members(value: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(segment, child)`` for the immediate members of a container."""
    if isinstance(value, Mapping):
        for key, child in value.items():
            key = str(key)
            if key in BLOCKED_KEYS:
                continue
            yield key, child
    elif is_sequence(value):
        for index, child in enumerate(value):
            yield str(index), child


def classify(value: Any) -> NodeKind:
    """A non-empty mapping or sequence is a branch; everything else is a leaf."""
    if isinstance(value, Mapping) or is_sequence(value):
        for _ in members(value):
            return NodeKind.BRANCH
    return NodeKind.LEAF


def type_name(value: Any) -> str:
    """Badge text for a value (``string``, ``number``, ``array[3]``, ...)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if is_sequence(value):
        return f"array[{len(value)}]"
    return type(value).__name__


def join_path(parent: str, segment: str) -> str:
    return f"{parent}.{segment}" if parent else segment


class TreeIndex:
    """Index of one sample-data tree keyed by dot-path string.

    Children are computed on first request and cached, so the cost follows
    the number of levels actually expanded rather than the size of the data.
    """

    def __init__(self, data: Any) -> None:
        self._data = data
        self._children: dict[str, tuple[PathNode, ...]] = {}

    @property
    def data(self) -> Any:
        return self._data

    def value_at(self, path: str) -> Any:
        """Return the value at ``path`` (root for ``""``), or None if unresolved."""
        if not parse_path(path):
            return self._data
        value = lookup(self._data, path)
        return value if is_resolved(value) else None

    def children(self, path: str = "") -> tuple[PathNode, ...]:
        cached = self._children.get(path)
        if cached is not None:
            return cached

        parts = parse_path(path)
        if parts:
            value = lookup(self._data, parts)
            if not is_resolved(value):
                logger.debug("No value at '%s'; no children", path)
                value = None
        else:
            value = self._data
        parent = ".".join(parts)
        depth = len(parts)

        nodes = tuple(
            PathNode(
                path=join_path(parent, segment),
                label=segment,
                kind=classify(child),
                depth=depth,
                type_name=type_name(child),
            )
            for segment, child in members(value)
        )
        logger.debug("Indexed %d child(ren) of '%s'", len(nodes), path)
        self._children[path] = nodes
        return nodes

    def roots(self) -> tuple[PathNode, ...]:
        return self.children("")


def children_of(data: Any, path: str = "") -> tuple[PathNode, ...]:
    """Immediate children of ``path`` in ``data`` (the root when ``path`` is empty)."""
    return TreeIndex(data).children(path)

"""Suggestion engine — rank sample-data paths against a typed fragment."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .resolve import parse_path, stringify
from .settings import BindingSettings
from .tree import NodeKind, classify, is_sequence, join_path, members, type_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuggestionItem:
    path: str
    label: str
    preview_value: str


@dataclass(frozen=True)
class _Entry:
    path: str
    lowered: str
    depth: int
    item: SuggestionItem


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


class SuggestionEngine:
    """Completions for a partially typed path, built from one data tree.

    The flat path index is built on first query and reused until the engine
    is dropped; a new sample-data tree gets a new engine.
    """

    def __init__(self, data: Any, *, settings: BindingSettings | None = None) -> None:
        self._data = data
        self._settings = settings or BindingSettings()
        self._entries: list[_Entry] | None = None

    def _walk(self, value: Any, parent: str, depth: int) -> Iterator[_Entry]:
        if depth >= self._settings.suggestion_depth:
            return
        limit = self._settings.max_array_items if is_sequence(value) else None
        for count, (segment, child) in enumerate(members(value)):
            if limit is not None and count >= limit:
                break
            path = join_path(parent, segment)
            if classify(child) is NodeKind.BRANCH:
                preview = type_name(child)
            else:
                preview = stringify(child)
            item = SuggestionItem(
                path=path,
                label=segment,
                preview_value=_truncate(preview, self._settings.preview_length),
            )
            yield _Entry(path=path, lowered=path.lower(), depth=depth + 1, item=item)
            yield from self._walk(child, path, depth + 1)

    def entries(self) -> list[_Entry]:
        if self._entries is None:
            self._entries = list(self._walk(self._data, "", 0))
            logger.debug("Built suggestion index with %d path(s)", len(self._entries))
        return self._entries

    @staticmethod
    def _matches(entry: _Entry, query: str) -> bool:
        if entry.lowered.startswith(query):
            return True
        # any suffix that begins at a segment boundary
        offset = entry.lowered.find(".")
        while offset != -1:
            if entry.lowered.startswith(query, offset + 1):
                return True
            offset = entry.lowered.find(".", offset + 1)
        return False

    def suggest(self, fragment: str) -> list[SuggestionItem]:
        """Rank paths matching ``fragment``: fewest segments first, then lexical."""
        query = ".".join(parse_path(fragment)).lower()
        if fragment.strip().endswith("."):
            query += "."
        matched = [e for e in self.entries() if not query or self._matches(e, query)]
        matched.sort(key=lambda e: (e.depth, e.lowered))
        return [e.item for e in matched[: self._settings.max_suggestions]]

"""Explorer controller — point-and-click navigation of the sample-data tree."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

from .tree import NodeKind, PathNode, TreeIndex

logger = logging.getLogger(__name__)


class ExplorerTreeController:
    """Expand/collapse state and leaf selection for the path explorer popover."""

    def __init__(
        self,
        sample_data: Any = None,
        on_select: Callable[[str], None] | None = None,
    ) -> None:
        self._on_select = on_select
        self._index: TreeIndex | None = None
        self.expanded_paths: set[str] = set()
        self.is_open = False
        self._set_index(sample_data)

    def _set_index(self, data: Any) -> None:
        self._index = TreeIndex(data) if data is not None else None
        self.expanded_paths = self._default_expanded()

    def _default_expanded(self) -> set[str]:
        if self._index is None:
            return set()
        return {node.path for node in self._index.roots() if node.kind is NodeKind.BRANCH}

    @property
    def sample_data(self) -> Any:
        return self._index.data if self._index is not None else None

    @property
    def can_open(self) -> bool:
        return self._index is not None and bool(self._index.roots())

    def set_sample_data(self, data: Any) -> None:
        if data is self.sample_data:
            return
        logger.debug("Explorer data replaced; resetting expansion")
        self._set_index(data)
        if not self.can_open:
            self.is_open = False

    def open(self) -> bool:
        """Open the popover with every depth-0 branch expanded."""
        if not self.can_open:
            return False
        self.expanded_paths = self._default_expanded()
        self.is_open = True
        return True

    def close(self) -> None:
        self.is_open = False

    def toggle(self, path: str) -> None:
        if path in self.expanded_paths:
            self.expanded_paths.discard(path)
        else:
            self.expanded_paths.add(path)

    def is_leaf(self, node: PathNode) -> bool:
        return node.kind is NodeKind.LEAF

    def children(self, path: str = "") -> tuple[PathNode, ...]:
        if self._index is None:
            return ()
        return self._index.children(path)

    def visible_nodes(self) -> Iterator[PathNode]:
        """Yield the rows currently shown, parents before their children."""

        def walk(path: str) -> Iterator[PathNode]:
            for node in self.children(path):
                yield node
                if node.kind is NodeKind.BRANCH and node.path in self.expanded_paths:
                    yield from walk(node.path)

        if self.is_open:
            yield from walk("")

    def select_leaf(self, node: PathNode) -> bool:
        """Emit a leaf's path and close the popover; branches are ignored."""
        if not self.is_leaf(node):
            logger.debug("Ignoring selection of branch '%s'", node.path)
            return False
        logger.debug("Selected path '%s'", node.path)
        if self._on_select is not None:
            self._on_select(node.path)
        self.is_open = False
        return True

    def click(self, node: PathNode) -> None:
        if self.is_leaf(node):
            self.select_leaf(node)
        else:
            self.toggle(node.path)

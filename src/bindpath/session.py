"""Binding field — the interactive editing surface for one text prop."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .autocomplete import AutocompleteController, PopupState, Scheduler
from .explorer import ExplorerTreeController
from .insert import append_binding
from .settings import BindingSettings
from .suggest import SuggestionItem

logger = logging.getLogger(__name__)


@dataclass
class EditorSessionState:
    """Snapshot of a live editing session."""

    raw_value: str
    cursor_position: int
    popup: PopupState = PopupState.CLOSED
    suggestions: list[SuggestionItem] = field(default_factory=list)
    highlighted_index: int = 0
    expanded_paths: set[str] = field(default_factory=set)


class BindingField:
    """Text input with {{ autocomplete plus a path explorer button.

    ``on_change`` receives the full value on every keystroke and once per
    inserted binding. ``multiline`` only affects how a host renders the
    control.
    """

    def __init__(
        self,
        value: str = "",
        on_change: Callable[[str], None] | None = None,
        *,
        sample_data: Any = None,
        multiline: bool = False,
        placeholder: str | None = None,
        scheduler: Scheduler | None = None,
        settings: BindingSettings | None = None,
    ) -> None:
        settings = settings or BindingSettings()
        self.multiline = multiline
        self.placeholder = placeholder if placeholder is not None else settings.placeholder
        self._on_change = on_change
        self.autocomplete = AutocompleteController(
            value,
            self._emit,
            sample_data=sample_data,
            scheduler=scheduler,
            settings=settings,
        )
        self.explorer = ExplorerTreeController(sample_data, self._insert_path)

    @property
    def value(self) -> str:
        return self.autocomplete.value

    @property
    def sample_data(self) -> Any:
        return self.autocomplete.sample_data

    @property
    def state(self) -> EditorSessionState:
        ac = self.autocomplete
        return EditorSessionState(
            raw_value=ac.value,
            cursor_position=ac.cursor,
            popup=ac.popup,
            suggestions=list(ac.suggestions),
            highlighted_index=ac.highlighted,
            expanded_paths=set(self.explorer.expanded_paths),
        )

    def _emit(self, value: str) -> None:
        if self._on_change is not None:
            self._on_change(value)

    def _insert_path(self, path: str) -> None:
        if not self.autocomplete.mounted:
            return
        new_value = append_binding(self.value, path)
        self.autocomplete.set_value(new_value)
        self.autocomplete.move_cursor(len(new_value))
        self._emit(new_value)

    def set_value(self, value: str) -> None:
        self.autocomplete.set_value(value)

    def set_sample_data(self, data: Any) -> None:
        self.autocomplete.set_sample_data(data)
        self.explorer.set_sample_data(data)

    def unmount(self) -> None:
        logger.debug("Binding field unmounted")
        self.autocomplete.unmount()
        self.explorer.close()

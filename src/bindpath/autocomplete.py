"""Autocomplete controller — the live-typing suggestion state machine.

The controller is driven by discrete events (keystrokes, cursor moves, keys,
timer fires) and owns a single debounce timer handle. All transitions run
synchronously on the caller's thread; the only deferred work is the timer
callback, which is scheduled through a :class:`Scheduler`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any, Protocol

from .insert import replace_fragment
from .resolve import CLOSE, OPEN
from .settings import BindingSettings
from .suggest import SuggestionEngine, SuggestionItem

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with an asyncio-style ``call_later``."""

    def call_later(self, delay: float, callback: Callable[[], Any], /) -> TimerHandle: ...


class PopupState(StrEnum):
    CLOSED = "closed"
    PENDING = "pending"
    OPEN = "open"


def find_active_fragment(text: str, cursor: int) -> tuple[int, str] | None:
    """Locate the open binding the cursor sits in.

    Returns ``(start, fragment)`` where ``start`` is the index of the ``{{``
    and ``fragment`` is the text between it and the cursor, or None when the
    cursor is not inside an unclosed binding.
    """
    cursor = max(0, min(cursor, len(text)))
    start = text.rfind(OPEN, 0, cursor)
    if start == -1:
        return None
    close = text.find(CLOSE, start + len(OPEN))
    if close != -1 and close < cursor:
        return None
    return start, text[start + len(OPEN) : cursor]


class AutocompleteController:
    """Suggestion popup for one editing session."""

    def __init__(
        self,
        value: str = "",
        on_change: Callable[[str], None] | None = None,
        *,
        sample_data: Any = None,
        scheduler: Scheduler | None = None,
        settings: BindingSettings | None = None,
    ) -> None:
        self._settings = settings or BindingSettings()
        self._scheduler = scheduler
        self._on_change = on_change
        self._value = value
        self._cursor = len(value)
        self._sample_data = sample_data
        self._engine: SuggestionEngine | None = None
        self._timer: TimerHandle | None = None
        self._mounted = True

        self.popup = PopupState.CLOSED
        self.suggestions: list[SuggestionItem] = []
        self.highlighted = 0

    # -- read-only views --

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def sample_data(self) -> Any:
        return self._sample_data

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    @property
    def mounted(self) -> bool:
        return self._mounted

    # -- timer slot --

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _resolve_scheduler(self) -> Scheduler | None:
        if self._scheduler is not None:
            return self._scheduler
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def _schedule(self, scheduler: Scheduler) -> None:
        self._cancel_timer()
        self._timer = scheduler.call_later(self._settings.debounce_seconds, self._on_timer)

    # -- transitions --

    def _close(self) -> None:
        self._cancel_timer()
        if self.popup is not PopupState.CLOSED:
            logger.debug("Popup %s -> closed", self.popup)
        self.popup = PopupState.CLOSED
        self.suggestions = []
        self.highlighted = 0

    def _evaluate(self) -> None:
        if self._sample_data is None or find_active_fragment(self._value, self._cursor) is None:
            self._close()
            return
        scheduler = self._resolve_scheduler()
        if scheduler is None:
            logger.warning("No scheduler and no running event loop; suggestions disabled")
            self._close()
            return
        self._schedule(scheduler)
        self.popup = PopupState.PENDING
        self.suggestions = []
        self.highlighted = 0

    def _on_timer(self) -> None:
        self._timer = None
        if not self._mounted:
            return
        active = find_active_fragment(self._value, self._cursor)
        if self._sample_data is None or active is None:
            self._close()
            return
        if self._engine is None:
            self._engine = SuggestionEngine(self._sample_data, settings=self._settings)
        items = self._engine.suggest(active[1])
        if not items:
            logger.debug("No suggestions for '%s'", active[1])
            self._close()
            return
        self.popup = PopupState.OPEN
        self.suggestions = items
        self.highlighted = 0
        logger.debug("Popup open with %d suggestion(s) for '%s'", len(items), active[1])

    def _emit(self, value: str) -> None:
        if self._on_change is not None:
            self._on_change(value)

    # -- events --

    def input(self, value: str, cursor: int | None = None) -> None:
        """A keystroke produced ``value`` with the caret at ``cursor``."""
        if not self._mounted:
            return
        self._value = value
        self._cursor = len(value) if cursor is None else max(0, min(cursor, len(value)))
        self._emit(value)
        self._evaluate()

    def move_cursor(self, cursor: int) -> None:
        if not self._mounted:
            return
        self._cursor = max(0, min(cursor, len(self._value)))
        self._evaluate()

    def set_value(self, value: str) -> None:
        """Host-side value update; keeps the cursor in range and closes the popup."""
        if not self._mounted:
            return
        self._value = value
        self._cursor = min(self._cursor, len(value))
        self._close()

    def set_sample_data(self, data: Any) -> None:
        if not self._mounted or data is self._sample_data:
            return
        logger.debug("Sample data replaced; resetting suggestions")
        self._sample_data = data
        self._engine = None
        self._close()

    def key(self, name: str) -> bool:
        """Handle a navigation key; returns True when the key was consumed."""
        if not self._mounted:
            return False
        if name == "Escape":
            if self.popup is PopupState.CLOSED:
                return False
            self._close()
            return True
        if self.popup is not PopupState.OPEN or not self.suggestions:
            return False
        count = len(self.suggestions)
        if name == "ArrowDown":
            self.highlighted = (self.highlighted + 1) % count
        elif name == "ArrowUp":
            self.highlighted = (self.highlighted - 1) % count
        elif name in ("Enter", "Tab"):
            self.select(self.highlighted)
        else:
            return False
        return True

    def select(self, index: int) -> str | None:
        """Insert the suggestion at ``index``; returns the new value if inserted."""
        if not self._mounted or self.popup is not PopupState.OPEN:
            return None
        if not 0 <= index < len(self.suggestions):
            return None
        active = find_active_fragment(self._value, self._cursor)
        if active is None:
            self._close()
            return None
        path = self.suggestions[index].path
        self._value, self._cursor = replace_fragment(self._value, active[0], self._cursor, path)
        logger.debug("Inserted binding '%s'", path)
        self._close()
        self._emit(self._value)
        return self._value

    def blur(self) -> None:
        """Focus left the field and popup (outside click)."""
        if self._mounted:
            self._close()

    def unmount(self) -> None:
        self._close()
        self._mounted = False

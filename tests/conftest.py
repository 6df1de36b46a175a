"""Shared fixtures: a manually driven scheduler for debounce timers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest


class FakeHandle:
    def __init__(self, when: float, callback: Callable[[], Any]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """asyncio-style ``call_later`` against a virtual clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def call_later(self, delay: float, callback: Callable[[], Any]) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = [h for h in self.pending if h.when <= self.now]
        for handle in sorted(due, key=lambda h: h.when):
            self.handles.remove(handle)
            handle.callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()

"""Render context — sample data threaded explicitly through a render call."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from .resolve import OPEN, Resolver
from .settings import BindingSettings

T = TypeVar("T")
R = TypeVar("R")


class Context:
    """Resolution state passed through the render chain."""

    def __init__(self, sample_data: Any = None, *, settings: BindingSettings | None = None) -> None:
        self.sample_data = sample_data
        self.settings = settings or BindingSettings()
        self.resolver = Resolver(sample_data, settings=self.settings)

    def resolve(self, text: str) -> str:
        return self.resolver.resolve_text(text)

    def resolve_props(self, props: T) -> T:
        return self.resolver.resolve(props)


def resolved_value(value: str, sample_data: Any = None) -> str:
    """Resolve a single display string; returns it untouched without data."""
    if sample_data is None or not value or OPEN not in value:
        return value
    return Resolver(sample_data).resolve_text(value)


def with_binding_resolution(render: Callable[..., R]) -> Callable[..., R]:
    """Wrap a component render function so its props arrive resolved.

    The wrapped callable takes an optional ``ctx`` keyword; without one (or
    without sample data) the props are passed through as given.
    """

    @functools.wraps(render)
    def wrapped(props: Any, *args: Any, ctx: Context | None = None, **kwargs: Any) -> R:
        if ctx is not None:
            props = ctx.resolve_props(props)
        return render(props, *args, **kwargs)

    return wrapped

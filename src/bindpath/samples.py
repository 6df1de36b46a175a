"""Sample data — the starter dataset, file loading and a named catalog."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import hcl2
import jinja2
from lark.exceptions import LarkError

logger = logging.getLogger(__name__)

SUFFIXES = (".json", ".hcl")

DEFAULT_SAMPLE_DATA: dict[str, Any] = {
    "company": {
        "name": "Acme Corp",
        "address": "123 Main Street, Springfield",
        "phone": "(555) 123-4567",
        "email": "contact@acme.com",
    },
    "report": {
        "title": "Monthly Report",
        "date": "2025-01-15",
        "author": "John Doe",
    },
    "items": [
        {"name": "Item 1", "quantity": 10, "price": 29.99},
        {"name": "Item 2", "quantity": 5, "price": 49.99},
        {"name": "Item 3", "quantity": 8, "price": 19.99},
    ],
    "summary": {
        "total": 649.72,
        "count": 23,
        "average": 28.25,
    },
}


def load(
    file: Path,
    *,
    context: dict[str, Any] | None = None,
) -> Any:
    """Load one sample data file, rendering Jinja2 templates with context.

    Template variables use ${ name } so that {{path}} bindings stored in the
    data stay literal.
    """
    file = Path(file)
    if file.suffix not in SUFFIXES:
        raise ValueError(f"{file}: unsupported sample data format '{file.suffix}'")
    text = file.read_text()
    ctx = context if context is not None else {}
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
        variable_start_string="${",
        variable_end_string="}",
    )
    try:
        template = env.from_string(text)
        text = template.render(ctx)
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc

    logger.debug("Parsing sample data from %s", file)
    try:
        if file.suffix == ".json":
            return json.loads(text)
        return hcl2.loads(text)
    except (json.JSONDecodeError, LarkError) as exc:
        raise ValueError(f"{file}: {exc}") from exc


class SampleCatalog(Mapping[str, Any]):
    """Named sample data sets, loaded from disk on first access."""

    def __init__(self, *, context: dict[str, Any] | None = None) -> None:
        self._context = context
        self._files: dict[str, Path] = {}
        self._loaded: dict[str, Any] = {}

    def add(self, name: str, data: Any) -> None:
        """Register an in-memory data set."""
        if name in self:
            raise ValueError(f"Duplicate sample data: '{name}'")
        self._loaded[name] = data

    def scan(self, path: str | Path, *, recurse: bool = True) -> None:
        """Register every .json / .hcl file under ``path`` by file stem."""
        root = Path(path)
        pattern = "**/*" if recurse else "*"
        for file in sorted(root.glob(pattern)):
            if not file.is_file() or file.suffix not in SUFFIXES:
                continue
            name = file.stem
            if name in self:
                raise ValueError(f"Duplicate sample data: '{name}'")
            logger.debug("Found sample data '%s' in %s", name, file)
            self._files[name] = file

    def __getitem__(self, name: str) -> Any:
        if name not in self._loaded:
            file = self._files[name]
            self._loaded[name] = load(file, context=self._context)
        return self._loaded[name]

    def __contains__(self, name: object) -> bool:
        return name in self._loaded or name in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys([*self._files, *self._loaded]))

    def __len__(self) -> int:
        return len(set(self._files) | set(self._loaded))

    def __repr__(self) -> str:
        return f"SampleCatalog(files={len(self._files)}, loaded={len(self._loaded)})"

"""Settings model shared by the resolver and the editing controllers."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BindingSettings(BaseModel):
    """Tunable limits for resolution, suggestions and the live editor."""

    model_config = {"frozen": True}

    debounce_ms: int = Field(default=150, ge=0)
    max_suggestions: int = Field(default=10, ge=1)
    suggestion_depth: int = Field(default=10, ge=1)
    max_array_items: int = Field(default=1, ge=1)
    max_resolve_depth: int = Field(default=256, ge=1, le=512)
    preview_length: int = Field(default=40, ge=4)
    placeholder: str = "Type {{ to insert binding..."

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

"""Type definitions for the upstream models.dev catalog document.

The document maps provider ids to provider blocks, each holding a mapping of
model ids to model records. Prices are per million tokens.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class UpstreamModalities(BaseModel):
    """Input/output modalities a model accepts and produces."""

    input: tuple[str, ...]
    output: tuple[str, ...]

    model_config = ConfigDict(frozen=True)


class UpstreamCost(BaseModel):
    """Pricing information for a model (costs per million tokens)."""

    input: float
    output: float
    cache_read: float | None = None
    cache_write: float | None = None

    model_config = ConfigDict(frozen=True)


class UpstreamLimit(BaseModel):
    """Token limits for a model."""

    context: PositiveInt
    output: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class ModelInfo(BaseModel):
    """Individual model record from the upstream catalog.

    ``modalities`` and ``limit`` are required: without them a canonical
    Model cannot be built.
    """

    id: str | None = None
    name: str | None = None
    attachment: bool = False
    reasoning: bool = False
    temperature: bool = False
    tool_call: bool = False
    knowledge: str | None = None
    release_date: str | None = None
    last_updated: str | None = None
    modalities: UpstreamModalities
    open_weights: bool = False
    cost: UpstreamCost | None = None
    limit: UpstreamLimit

    model_config = ConfigDict(frozen=True)

    @property
    def accepts_images(self) -> bool:
        return "image" in self.modalities.input


class UpstreamProvider(BaseModel):
    """Provider block from the upstream catalog.

    Model records are kept raw so that one malformed record can be dropped
    without rejecting the whole provider.
    """

    id: str | None = None
    name: str | None = None
    env: tuple[str, ...] = ()
    npm: str | None = None
    api: str | None = None
    doc: str | None = None
    models: dict[str, Any]

    model_config = ConfigDict(frozen=True)


__all__ = [
    "ModelInfo",
    "UpstreamCost",
    "UpstreamLimit",
    "UpstreamModalities",
    "UpstreamProvider",
]

"""Catalog API contracts.

Response shapes for the read-only catalog endpoints. Models are returned in
their canonical form (including the computed ``path``), so the wire contract
is the domain contract.
"""

from pydantic import BaseModel, ConfigDict

from ...domain.model import Model


class ModelListResponse(BaseModel):
    """Filtered model listing."""

    models: list[Model]
    count: int

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_models(cls, models: list[Model]) -> "ModelListResponse":
        return cls(models=models, count=len(models))


class ProviderListResponse(BaseModel):
    """Distinct provider ids in the current snapshot, sorted."""

    providers: list[str]

    model_config = ConfigDict(frozen=True)

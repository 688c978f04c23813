"""Catalog API Router - thin HTTP layer over the model registry.

Endpoints:
- GET /models: Filtered listing; query params map onto ModelFilter
- GET /models/{path}: One model by composite key (404 on miss)
- GET /providers: Distinct provider ids
- POST /models/refresh: Fetch upstream and replace the snapshot
"""

import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, HTTPException

from ...domain.errors import ModelNotFound, UpstreamDocumentError
from ...domain.ingestion import IngestionReport
from ...domain.model import Model, ModelFilter
from ...domain.registry import ModelRegistry
from ...service import CatalogService
from ..contracts import ModelListResponse, ProviderListResponse
from ..deps import get_catalog_service, get_model_registry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/models", response_model=ModelListResponse)
async def list_models(
    registry: Annotated[ModelRegistry, Depends(get_model_registry)],
    provider: str | None = None,
    supports_vision: bool | None = None,
    supports_tools: bool | None = None,
    supports_streaming: bool | None = None,
    supports_temperature: bool | None = None,
) -> ModelListResponse:
    """List models matching every supplied criterion."""
    model_filter = ModelFilter(
        provider=provider,
        supports_vision=supports_vision,
        supports_tools=supports_tools,
        supports_streaming=supports_streaming,
        supports_temperature=supports_temperature,
    )
    return ModelListResponse.from_models(registry.list_models(model_filter))


@router.get("/providers", response_model=ProviderListResponse)
async def list_providers(
    registry: Annotated[ModelRegistry, Depends(get_model_registry)],
) -> ProviderListResponse:
    return ProviderListResponse(providers=registry.list_providers())


@router.post("/models/refresh", response_model=IngestionReport)
def refresh_catalog(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> IngestionReport:
    """
    Fetch the upstream catalog and replace the snapshot.

    Runs in the threadpool: the fetch is blocking I/O. On a fetch failure the
    current snapshot keeps serving and the caller gets 502.
    """
    try:
        return service.refresh()
    except httpx.HTTPError as exc:
        logger.exception("Catalog refresh failed")
        raise HTTPException(status_code=502, detail=f"Catalog fetch failed: {exc}") from exc
    except UpstreamDocumentError as exc:
        logger.error("Catalog refresh rejected: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/models/{path:path}", response_model=Model)
async def get_model(
    path: str,
    registry: Annotated[ModelRegistry, Depends(get_model_registry)],
) -> Model:
    """Look up one model by ``provider/vendor/name``."""
    try:
        return registry.get(path)
    except ModelNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc

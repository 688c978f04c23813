"""API dependency wiring.

Thin DI glue: the service factory owns construction, these functions only
cache and hand out the results. Tests swap ``get_catalog_service`` through
``app.dependency_overrides`` and everything downstream follows.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ..config import settings
from ..domain.registry import ModelRegistry
from ..service import CatalogService, create_catalog_service


@lru_cache(maxsize=1)
def get_catalog_service() -> CatalogService:
    """Create the catalog service from config (cached singleton)."""
    return create_catalog_service(settings)


def get_model_registry(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ModelRegistry:
    return service.registry

"""Service layer - catalog ingestion and HTTP transport handles."""

from .catalog import CatalogService, create_catalog_service, fetch_catalog
from .client_pool import ClientPool, TransportConfig

__all__ = [
    "CatalogService",
    "ClientPool",
    "TransportConfig",
    "create_catalog_service",
    "fetch_catalog",
]

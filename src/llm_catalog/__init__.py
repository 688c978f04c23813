"""llm-catalog package exports."""

from .config import Settings, get_api_key, settings
from .domain import Conversation, Model, ModelFilter, ModelRegistry
from .service import CatalogService, create_catalog_service

__all__ = [
    "CatalogService",
    "Conversation",
    "Model",
    "ModelFilter",
    "ModelRegistry",
    "Settings",
    "create_catalog_service",
    "get_api_key",
    "settings",
]

from .catalog import ModelListResponse, ProviderListResponse
from .health import HealthResponse

__all__ = [
    "HealthResponse",
    "ModelListResponse",
    "ProviderListResponse",
]

"""
Shared test fixtures and configuration.

Environment strategy:
- All tests use .env.test (no network, no real credentials)
- The upstream catalog is a small in-memory document shaped like models.dev
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

ENV_FILE = Path(__file__).parent.parent / ".env.test"

load_dotenv(ENV_FILE, override=True)

from llm_catalog.domain.capabilities import CapabilityDefaults
from llm_catalog.domain.model import Capabilities, Model
from llm_catalog.domain.normalizer import CatalogNormalizer
from llm_catalog.domain.registry import ModelRegistry
from llm_catalog.domain.vendor import VendorResolver
from llm_catalog.service.catalog import CatalogService


def upstream_record(**overrides: Any) -> dict[str, Any]:
    """A valid models.dev record; keyword arguments replace top-level fields."""
    record: dict[str, Any] = {
        "id": "gpt-4o-mini",
        "name": "GPT-4o mini",
        "attachment": True,
        "reasoning": False,
        "temperature": True,
        "tool_call": True,
        "knowledge": "2023-09",
        "release_date": "2024-07-18",
        "last_updated": "2024-07-18",
        "modalities": {"input": ["text", "image"], "output": ["text"]},
        "open_weights": False,
        "cost": {"input": 0.15, "output": 0.6, "cache_read": 0.075},
        "limit": {"context": 128000, "output": 16384},
    }
    record.update(overrides)
    return record


@pytest.fixture
def catalog_document() -> dict[str, Any]:
    """Upstream catalog with three providers and five models."""
    return {
        "openai": {
            "id": "openai",
            "name": "OpenAI",
            "env": ["OPENAI_API_KEY"],
            "models": {
                "gpt-4o-mini": upstream_record(),
                "o3-mini": upstream_record(
                    id="o3-mini",
                    name="o3-mini",
                    attachment=False,
                    temperature=False,
                    modalities={"input": ["text"], "output": ["text"]},
                    cost={"input": 1.1, "output": 4.4},
                    limit={"context": 200000, "output": 100000},
                ),
            },
        },
        "anthropic": {
            "id": "anthropic",
            "name": "Anthropic",
            "models": {
                "claude-sonnet-4-20250514": upstream_record(
                    id="claude-sonnet-4-20250514",
                    name="Claude Sonnet 4",
                    cost={"input": 3, "output": 15, "cache_read": 0.3, "cache_write": 3.75},
                    limit={"context": 200000, "output": 64000},
                ),
            },
        },
        "openrouter": {
            "id": "openrouter",
            "name": "OpenRouter",
            "models": {
                "anthropic/claude-sonnet-4": upstream_record(
                    id="anthropic/claude-sonnet-4",
                    name="Anthropic: Claude Sonnet 4",
                    cost={"input": 3, "output": 15},
                    limit={"context": 200000, "output": 64000},
                ),
                "qwen/qwen3-coder": upstream_record(
                    id="qwen/qwen3-coder",
                    name="Qwen3 Coder",
                    attachment=False,
                    open_weights=True,
                    modalities={"input": ["text"], "output": ["text"]},
                    cost=None,
                    limit={"context": 262144, "output": 0},
                ),
            },
        },
    }


@pytest.fixture
def vendor_resolver() -> VendorResolver:
    """Resolver built from the vendor mappings shipped with the package."""
    return VendorResolver.from_json_file()


@pytest.fixture
def capability_defaults() -> CapabilityDefaults:
    """Provider baselines shipped with the package."""
    return CapabilityDefaults.from_json_file()


@pytest.fixture
def normalizer(vendor_resolver: VendorResolver, capability_defaults: CapabilityDefaults) -> CatalogNormalizer:
    return CatalogNormalizer(resolver=vendor_resolver, defaults=capability_defaults)


@pytest.fixture
def catalog_service(normalizer: CatalogNormalizer) -> CatalogService:
    """Service with an empty registry and the default client pool."""
    return CatalogService(normalizer=normalizer, registry=ModelRegistry())


@pytest.fixture
def make_model() -> Callable[..., Model]:
    """Factory for canonical Models with only the fields a test cares about."""

    def _make(
        provider: str = "openai",
        name: str = "gpt-4o-mini",
        vendor: str | None = None,
        *,
        context_length: int = 128000,
        **capability_flags: bool,
    ) -> Model:
        return Model(
            provider_name=provider,
            vendor_name=vendor or provider,
            name=name,
            context_length=context_length,
            capabilities=Capabilities(**capability_flags),
        )

    return _make


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    """Factory for raw upstream records (see ``upstream_record``)."""
    return upstream_record

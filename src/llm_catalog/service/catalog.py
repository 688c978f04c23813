"""Catalog service - fetches the upstream document and publishes snapshots.

Thin orchestration: the domain normalizer owns every transformation rule and
the registry owns snapshot publication. This module walks the upstream
document, collects drops, and hands one batch to the registry.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..domain.capabilities import CapabilityDefaults
from ..domain.domain_type import DropReason
from ..domain.errors import NormalizationError, UpstreamDocumentError
from ..domain.ingestion import DroppedRecord, IngestionReport
from ..domain.model import Model
from ..domain.normalizer import CatalogNormalizer
from ..domain.registry import ModelRegistry
from ..domain.upstream import UpstreamProvider
from ..domain.vendor import VendorResolver
from .client_pool import ClientPool, TransportConfig

logger = logging.getLogger(__name__)

CATALOG_CLIENT_KEY = ""


def fetch_catalog(client: httpx.Client, url: str) -> Any:
    """GET the upstream catalog document.

    Transport and HTTP status errors are raised as ``httpx`` exceptions,
    unchanged.
    """
    response = client.get(url)
    response.raise_for_status()
    return response.json()


class CatalogService:
    """
    Owns the registry and the ingestion path into it.

    Service responsibilities:
    1. Walk the upstream document provider by provider
    2. Delegate each record to the CatalogNormalizer
    3. Drop bad records without failing the batch
    4. Publish the batch with one atomic ``replace_all``
    """

    def __init__(
        self,
        normalizer: CatalogNormalizer,
        registry: ModelRegistry | None = None,
        client_pool: ClientPool | None = None,
        catalog_url: str = "https://models.dev/api.json",
    ):
        self.normalizer = normalizer
        self.registry = registry if registry is not None else ModelRegistry()
        self.client_pool = client_pool if client_pool is not None else ClientPool()
        self.catalog_url = catalog_url

    def ingest(self, document: Mapping[str, Any]) -> IngestionReport:
        """
        Normalize a parsed upstream document and replace the registry contents.

        Args:
            document: ``{provider_id: {..., "models": {model_id: record}}}``

        Returns:
            Report of what was loaded and what was dropped

        Raises:
            UpstreamDocumentError: If the document is not a provider mapping
        """
        if not isinstance(document, Mapping):
            raise UpstreamDocumentError(
                f"Catalog document must be a mapping of providers, got {type(document).__name__}"
            )

        started_at = datetime.now(UTC)
        models: list[Model] = []
        dropped: list[DroppedRecord] = []

        for provider_id, block in document.items():
            try:
                provider = UpstreamProvider.model_validate(block)
            except ValidationError as exc:
                dropped.append(
                    DroppedRecord(
                        provider_id=provider_id,
                        reason=DropReason.MALFORMED_PROVIDER,
                        detail=f"Provider block rejected: {exc.error_count()} invalid field(s)",
                    )
                )
                continue

            for model_id, record in provider.models.items():
                try:
                    models.append(self.normalizer.normalize(provider_id, model_id, record))
                except NormalizationError as exc:
                    dropped.append(
                        DroppedRecord(
                            provider_id=provider_id,
                            model_id=model_id,
                            reason=DropReason.NORMALIZATION,
                            detail=exc.message[:1000],
                        )
                    )

        loaded = self.registry.replace_all(models)

        report = IngestionReport(
            loaded=loaded,
            dropped=tuple(dropped),
            started_at=started_at,
            finished_at=datetime.now(UTC),
        )
        for record in report.dropped:
            logger.warning("Dropped %s/%s: %s", record.provider_id, record.model_id or "*", record.detail)
        logger.info(
            "Catalog ingested: %d loaded, %d dropped",
            report.loaded,
            report.dropped_count,
            extra={"attributes": report.to_log_attributes()},
        )
        return report

    def refresh(self) -> IngestionReport:
        """Fetch the upstream catalog and ingest it.

        Raises:
            httpx.HTTPError: If the fetch fails; the registry is left untouched
            UpstreamDocumentError: If the response body is not a provider mapping
        """
        client = self.client_pool.get_or_create(self.catalog_url, CATALOG_CLIENT_KEY)
        document = fetch_catalog(client, self.catalog_url)
        return self.ingest(document)


def create_catalog_service(settings: Settings) -> CatalogService:
    """
    Factory function for creating CatalogService.

    Loads the static tables once; a bad table raises ``ConfigError`` here,
    at startup, rather than on first use.

    Args:
        settings: Application settings (table paths, catalog URL, transport)

    Returns:
        Configured CatalogService with an empty registry
    """
    resolver = VendorResolver.from_json_file(settings.vendor_mappings_path)
    defaults = CapabilityDefaults.from_json_file(settings.provider_defaults_path)
    return CatalogService(
        normalizer=CatalogNormalizer(resolver=resolver, defaults=defaults),
        registry=ModelRegistry(),
        client_pool=ClientPool(config=TransportConfig.from_settings(settings)),
        catalog_url=settings.catalog_url,
    )


__all__ = ["CatalogService", "create_catalog_service", "fetch_catalog"]

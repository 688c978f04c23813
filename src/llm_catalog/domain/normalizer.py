"""Catalog Normalizer - Upstream Record to Canonical Model.

Composes vendor resolution, provider capability baselines, and cost-unit
conversion into a single pure transformation. No I/O, no shared state.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .capabilities import CapabilityDefaults
from .errors import NormalizationError
from .model import Cost, Model, Properties
from .upstream import ModelInfo
from .vendor import VendorResolver, is_chinese_model, is_gdpr_compliant


class CatalogNormalizer:
    """Builds canonical ``Model`` entities from upstream model records."""

    def __init__(self, resolver: VendorResolver, defaults: CapabilityDefaults):
        self.resolver = resolver
        self.defaults = defaults

    def normalize(
        self,
        provider_id: str,
        model_id: str,
        raw_record: ModelInfo | Mapping[str, Any],
    ) -> Model:
        """Normalize one upstream record.

        Args:
            provider_id: Key of the provider block in the upstream document
            model_id: Key of the model record inside the provider block
            raw_record: Parsed ``ModelInfo`` or the raw JSON mapping

        Returns:
            Canonical Model keyed ``provider/vendor/model_id``

        Raises:
            NormalizationError: If a required upstream field is absent or invalid
        """
        info = self._parse(provider_id, model_id, raw_record)

        capabilities = self.defaults.for_provider(provider_id).model_copy(
            update={
                "supports_vision": info.accepts_images,
                "supports_tools": info.tool_call,
                "supports_temperature": info.temperature,
            }
        )

        if info.cost is None:
            cost = Cost()
        else:
            cost = Cost.from_per_million(
                info.cost.input,
                info.cost.output,
                info.cost.cache_read,
                info.cost.cache_write,
            )

        return Model(
            provider_name=provider_id,
            vendor_name=self.resolver.resolve(model_id, provider_id),
            name=model_id,
            cost=cost,
            context_length=info.limit.context,
            # upstream uses 0 for "unknown"
            completion_length=info.limit.output or None,
            capabilities=capabilities,
            properties=Properties(
                open_source=info.open_weights,
                chinese=is_chinese_model(model_id, provider_id),
                gdpr_compliant=is_gdpr_compliant(provider_id),
                is_nsfw=False,
            ),
            display_name=info.name,
            knowledge_cutoff=info.knowledge,
            release_date=info.release_date,
            last_updated=info.last_updated,
        )

    @staticmethod
    def _parse(provider_id: str, model_id: str, raw_record: ModelInfo | Mapping[str, Any]) -> ModelInfo:
        if isinstance(raw_record, ModelInfo):
            return raw_record
        try:
            return ModelInfo.model_validate(raw_record)
        except ValidationError as exc:
            fields = sorted({".".join(str(part) for part in err["loc"]) or "<record>" for err in exc.errors()})
            raise NormalizationError(
                f"Cannot normalize {provider_id}/{model_id}: invalid or missing {', '.join(fields)}",
                provider_id=provider_id,
                model_id=model_id,
            ) from exc


__all__ = ["CatalogNormalizer"]

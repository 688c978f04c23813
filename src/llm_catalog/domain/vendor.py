"""Vendor Resolution - Who Built the Model a Provider Hosts.

Aggregating providers (openrouter, together, bedrock, ...) host models made by
other organizations. The vendor is recovered from the model identifier with an
ordered list of regex rules loaded once from ``vendor_mappings.json``.

Resolution Order:
    1. First rule whose pattern is found in the model id (authored order)
    2. Provider-specific default vendor
    3. The provider id itself
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_VENDOR_MAPPINGS_PATH = Path(__file__).with_name("vendor_mappings.json")

CHINESE_PROVIDER_MARKERS: tuple[str, ...] = ("china", "alibaba", "moonshot")
CHINESE_MODEL_MARKERS: tuple[str, ...] = ("qwen",)
GDPR_COMPLIANT_PROVIDERS: frozenset[str] = frozenset({"openai", "azure", "anthropic"})


class VendorPattern(BaseModel):
    """One resolution rule: model ids matching ``pattern`` belong to ``vendor``."""

    pattern: str
    vendor: str

    model_config = ConfigDict(frozen=True)


class VendorRules(BaseModel):
    """Static vendor resolution tables.

    Attributes:
        patterns: Ordered rules; earlier rules win
        provider_defaults: Vendor to use per provider when no rule matches
    """

    patterns: tuple[VendorPattern, ...] = ()
    provider_defaults: dict[str, str] = {}

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VendorRules:
        return cls.model_validate(data)

    @classmethod
    def from_json_file(cls, path: Path = DEFAULT_VENDOR_MAPPINGS_PATH) -> VendorRules:
        """Load and validate rules from JSON.

        Raises:
            ConfigError: If the file is missing, is not JSON, or has the wrong shape
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return cls.from_dict(data)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise ConfigError(f"Invalid vendor mappings: {exc}", path=str(path)) from exc


class VendorResolver:
    """Maps (model id, provider id) to the canonical vendor name.

    Patterns are compiled once at construction. A pattern that does not
    compile is skipped so one bad rule cannot take resolution down.
    """

    def __init__(self, rules: VendorRules):
        self.rules = rules
        self._compiled: list[tuple[re.Pattern[str], str]] = []
        for rule in rules.patterns:
            try:
                self._compiled.append((re.compile(rule.pattern), rule.vendor))
            except re.error as exc:
                logger.warning("Skipping vendor pattern %r: %s", rule.pattern, exc)

    @classmethod
    def from_json_file(cls, path: Path = DEFAULT_VENDOR_MAPPINGS_PATH) -> VendorResolver:
        return cls(VendorRules.from_json_file(path))

    def resolve(self, model_id: str, provider_id: str) -> str:
        """Return the vendor for a model. Total: never raises.

        Example:
            >>> resolver.resolve("anthropic/claude-sonnet-4", "openrouter")
            'anthropic'
            >>> resolver.resolve("some-house-model", "acme")
            'acme'
        """
        for regex, vendor in self._compiled:
            if regex.search(model_id):
                return vendor
        return self.rules.provider_defaults.get(provider_id, provider_id)


def is_chinese_model(model_id: str, provider_id: str) -> bool:
    return any(marker in provider_id for marker in CHINESE_PROVIDER_MARKERS) or any(
        marker in model_id for marker in CHINESE_MODEL_MARKERS
    )


def is_gdpr_compliant(provider_id: str) -> bool:
    return provider_id in GDPR_COMPLIANT_PROVIDERS


__all__ = [
    "DEFAULT_VENDOR_MAPPINGS_PATH",
    "VendorPattern",
    "VendorResolver",
    "VendorRules",
    "is_chinese_model",
    "is_gdpr_compliant",
]

"""Per-Provider Capability Baselines.

Each provider's API has quirks that hold for every model it hosts (no ``n``
parameter, a single system turn, ...). ``provider_defaults.json`` records
those quirks once; normalization starts from the provider baseline and then
overrides the model-specific flags the upstream catalog reports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError

from .errors import ConfigError
from .model import Capabilities

DEFAULT_PROVIDER_DEFAULTS_PATH = Path(__file__).with_name("provider_defaults.json")


class ProviderProfile(BaseModel):
    """Static per-provider settings.

    Attributes:
        capabilities: Baseline flags for every model of the provider
        base_url: API root used when building transport handles
    """

    capabilities: Capabilities = Field(default_factory=Capabilities)
    base_url: str | None = None

    model_config = ConfigDict(frozen=True)


class CapabilityDefaults(RootModel[dict[str, ProviderProfile]]):
    """Provider id -> profile table, loaded once at startup."""

    root: dict[str, ProviderProfile] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CapabilityDefaults:
        return cls.model_validate(data)

    @classmethod
    def from_json_file(cls, path: Path = DEFAULT_PROVIDER_DEFAULTS_PATH) -> CapabilityDefaults:
        """Load and validate the provider table from JSON.

        Raises:
            ConfigError: If the file is missing, is not JSON, or has unknown flags
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return cls.from_dict(data)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise ConfigError(f"Invalid provider defaults: {exc}", path=str(path)) from exc

    def for_provider(self, provider_id: str) -> Capabilities:
        """Independent copy of the provider baseline (global defaults if unknown)."""
        profile = self.root.get(provider_id)
        if profile is None:
            return Capabilities()
        return profile.capabilities.model_copy(deep=True)

    def base_url_for(self, provider_id: str) -> str | None:
        profile = self.root.get(provider_id)
        return None if profile is None else profile.base_url


__all__ = ["DEFAULT_PROVIDER_DEFAULTS_PATH", "CapabilityDefaults", "ProviderProfile"]

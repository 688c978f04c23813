"""
Tests for per-provider capability baselines.

These tests demonstrate:
- Testing lookup semantics (known provider, unknown provider)
- Testing that the shipped table is valid configuration
- Testing load-time rejection of unknown flags
"""

import json

import pytest

from llm_catalog.domain.capabilities import CapabilityDefaults
from llm_catalog.domain.errors import ConfigError
from llm_catalog.domain.model import Capabilities


def test_shipped_table_loads(capability_defaults: CapabilityDefaults):
    """Demonstrates: The packaged JSON is valid and covers the major providers."""
    assert "openai" in capability_defaults.root
    assert "anthropic" in capability_defaults.root


def test_known_provider_overrides_global_defaults(capability_defaults: CapabilityDefaults):
    """
    Demonstrates: Testing the provider baseline, not Pydantic defaults.

    Anthropic rejects ``n`` and multiple system turns; flags the table does
    not mention keep the global default.
    """
    caps = capability_defaults.for_provider("anthropic")

    assert caps.supports_n is False
    assert caps.supports_multiple_system is False
    assert caps.supports_tool_choice is True
    assert caps.supports_streaming is True


def test_unknown_provider_gets_global_defaults(capability_defaults: CapabilityDefaults):
    assert capability_defaults.for_provider("acme") == Capabilities()


def test_for_provider_returns_independent_copy(capability_defaults: CapabilityDefaults):
    """Demonstrates: Callers never share the table's own instance."""
    first = capability_defaults.for_provider("openai")
    second = capability_defaults.for_provider("openai")

    assert first == second
    assert first is not second
    assert first is not capability_defaults.root["openai"].capabilities


def test_base_url_lookup(capability_defaults: CapabilityDefaults):
    assert capability_defaults.base_url_for("openai") == "https://api.openai.com/v1"
    assert capability_defaults.base_url_for("acme") is None


def test_unknown_flag_is_a_config_error(tmp_path):
    """
    Demonstrates: Typos in static configuration fail at startup.

    A misspelled flag would otherwise be silently ignored and the provider
    would get the permissive default.
    """
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"acme": {"capabilities": {"supports_teleport": True}}}))

    with pytest.raises(ConfigError) as exc_info:
        CapabilityDefaults.from_json_file(path)

    assert exc_info.value.path == str(path)


def test_invalid_json_is_a_config_error(tmp_path):
    path = tmp_path / "providers.json"
    path.write_text("{not json")

    with pytest.raises(ConfigError):
        CapabilityDefaults.from_json_file(path)

"""
Tests for ModelRegistry.

These tests demonstrate:
- Testing replace semantics (whole snapshot, never a merge)
- Testing lookup failure as a typed, recoverable error
- Testing filter composition against the registry
- Testing snapshot isolation under concurrent readers and writers
"""

import threading

import pytest

from llm_catalog.domain.errors import CatalogError, ModelNotFound
from llm_catalog.domain.model import ModelFilter
from llm_catalog.domain.registry import ModelRegistry


@pytest.fixture
def seeded_registry(make_model) -> ModelRegistry:
    return ModelRegistry(
        [
            make_model("openai", "gpt-4o-mini", supports_vision=True, supports_tools=True),
            make_model("openai", "o3-mini", supports_tools=True),
            make_model("anthropic", "claude-sonnet-4", supports_vision=True, supports_tools=True),
            make_model("openrouter", "anthropic/claude-3-haiku", "anthropic", supports_vision=True),
            make_model("groq", "llama-3.1-8b", "meta"),
        ]
    )


def test_replace_all_then_list_returns_exact_batch(make_model):
    """Demonstrates: What goes in is exactly what comes out, in order."""
    models = [make_model("openai", "a"), make_model("openai", "b"), make_model("groq", "c")]
    registry = ModelRegistry()

    registry.replace_all(models)

    assert registry.list_models() == models
    assert registry.list_models(None) == models
    assert len(registry) == 3


def test_duplicate_paths_last_write_wins(make_model):
    """Demonstrates: Deduplication by composite key keeps the later record."""
    registry = ModelRegistry()

    registry.replace_all([make_model(context_length=1000), make_model(context_length=2000)])

    assert len(registry) == 1
    assert registry.get("openai/openai/gpt-4o-mini").context_length == 2000


def test_replace_all_replaces_not_merges(make_model):
    """
    Demonstrates: Testing lifecycle semantics.

    A model missing from the new batch must disappear; stale entries would
    advertise models the upstream no longer lists.
    """
    registry = ModelRegistry([make_model("openai", "old"), make_model("openai", "kept")])

    registry.replace_all([make_model("openai", "kept")])

    assert "openai/openai/old" not in registry
    assert "openai/openai/kept" in registry
    assert len(registry) == 1


def test_get_missing_raises_model_not_found(seeded_registry: ModelRegistry):
    """Demonstrates: A miss is a typed error carrying the key, usable as KeyError."""
    with pytest.raises(ModelNotFound) as exc_info:
        seeded_registry.get("openai/openai/gpt-5-turbo-max")

    error = exc_info.value
    assert error.path == "openai/openai/gpt-5-turbo-max"
    assert isinstance(error, KeyError)
    assert isinstance(error, CatalogError)
    assert "gpt-5-turbo-max" in str(error)


def test_get_on_empty_registry_raises():
    with pytest.raises(ModelNotFound):
        ModelRegistry().get("openai/openai/gpt-4o-mini")


def test_filter_is_intersection_of_single_flag_filters(seeded_registry: ModelRegistry):
    """
    Demonstrates: Testing a composition law instead of hand-picked outputs.

    Constraints are conjunctive, so the combined result must equal the
    intersection of each single constraint's result.
    """
    vision = {m.path for m in seeded_registry.list_models(ModelFilter().with_vision(True))}
    tools = {m.path for m in seeded_registry.list_models(ModelFilter().with_tools(True))}
    both = {m.path for m in seeded_registry.list_models(ModelFilter().with_vision(True).with_tools(True))}

    assert both == vision & tools
    assert both == {"openai/openai/gpt-4o-mini", "anthropic/anthropic/claude-sonnet-4"}


def test_filter_by_provider(seeded_registry: ModelRegistry):
    models = seeded_registry.list_models(ModelFilter(provider="openai"))

    assert [m.name for m in models] == ["gpt-4o-mini", "o3-mini"]


def test_list_providers_sorted_and_distinct(seeded_registry: ModelRegistry):
    assert seeded_registry.list_providers() == ["anthropic", "groq", "openai", "openrouter"]


def test_list_providers_empty_registry():
    assert ModelRegistry().list_providers() == []


def test_snapshot_is_read_only(seeded_registry: ModelRegistry):
    snapshot = seeded_registry.snapshot()

    with pytest.raises(TypeError):
        snapshot["x"] = None  # type: ignore[index]


def test_readers_only_see_whole_snapshots(make_model):
    """
    Demonstrates: Testing atomic publication under contention.

    A writer alternates between two batches of different sizes and
    providers while readers list continuously. Every read must be exactly
    one batch; a mix of both would mean a torn snapshot.
    """
    batch_a = [make_model("alpha", f"a-{i}") for i in range(3)]
    batch_b = [make_model("beta", f"b-{i}") for i in range(7)]
    registry = ModelRegistry(batch_a)
    stop = threading.Event()
    errors: list[str] = []

    def writer() -> None:
        for i in range(300):
            registry.replace_all(batch_b if i % 2 == 0 else batch_a)
        stop.set()

    def reader() -> None:
        while not stop.is_set():
            models = registry.list_models()
            providers = {m.provider_name for m in models}
            if len(providers) != 1 or len(models) not in (3, 7):
                errors.append(f"torn read: {len(models)} models from {providers}")

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for thread in readers:
        thread.start()
    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    writer_thread.join()
    for thread in readers:
        thread.join()

    assert errors == []


def test_replace_all_returns_published_size(make_model):
    registry = ModelRegistry()

    published = registry.replace_all([make_model(name="a"), make_model(name="a"), make_model(name="b")])

    assert published == 2

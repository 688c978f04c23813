"""Model Registry - Concurrency-Safe Store of Canonical Models.

Holds the current catalog snapshot: an immutable mapping from composite key
(``provider/vendor/name``) to Model.

Concurrency:
    Copy-on-write. ``replace_all`` builds the next mapping off to the side
    and publishes it with a single reference assignment; the lock only
    serializes writers. Readers take the reference once per call and never
    lock, so every read sees one whole snapshot, never a mix of two.

Lifecycle:
    Empty at construction unless seeded. Each ``replace_all`` replaces the
    entire contents; models missing from the new batch disappear.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .errors import ModelNotFound
from .model import Model, ModelFilter

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Injectable catalog store; pass one instance to every reader.

    Example:
        >>> registry = ModelRegistry()
        >>> registry.replace_all(models)
        >>> registry.get("openai/openai/gpt-4o-mini").context_length
        128000
    """

    def __init__(self, models: Iterable[Model] = ()):
        self._write_lock = threading.Lock()
        self._snapshot: Mapping[str, Model] = MappingProxyType({})
        self.replace_all(models)

    def replace_all(self, models: Iterable[Model]) -> int:
        """Atomically swap in a new snapshot. Later duplicates win.

        Returns:
            Number of models in the snapshot this call published
        """
        snapshot = MappingProxyType({model.path: model for model in models})
        with self._write_lock:
            previous = len(self._snapshot)
            self._snapshot = snapshot
        if previous or snapshot:
            logger.info("Registry snapshot replaced: %d -> %d models", previous, len(snapshot))
        return len(snapshot)

    def get(self, path: str) -> Model:
        """Point lookup by composite key.

        Raises:
            ModelNotFound: If no model is stored under ``path``
        """
        model = self._snapshot.get(path)
        if model is None:
            raise ModelNotFound(path)
        return model

    def list_models(self, model_filter: ModelFilter | None = None) -> list[Model]:
        """Models matching ``model_filter`` (all models when None).

        Order follows the snapshot's insertion order, so it is stable for an
        unchanged snapshot.
        """
        snapshot = self._snapshot
        if model_filter is None:
            return list(snapshot.values())
        return [model for model in snapshot.values() if model_filter.matches(model)]

    def list_providers(self) -> list[str]:
        return sorted({model.provider_name for model in self._snapshot.values()})

    def snapshot(self) -> Mapping[str, Model]:
        """The current read-only mapping, for callers doing several reads."""
        return self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, path: object) -> bool:
        return path in self._snapshot


__all__ = ["ModelRegistry"]

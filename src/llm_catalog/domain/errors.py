"""Error types for the model catalog.

Every error raised by the catalog derives from ``CatalogError``. Lookup and
decode errors also derive from the matching builtin (``KeyError`` or
``ValueError``) so callers that already handle those keep working.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog-related errors."""


class ConfigError(CatalogError):
    """Raised when static configuration cannot be read or validated.

    Fatal at startup: without vendor rules and provider defaults the catalog
    cannot serve any data.

    Examples:
        >>> try:
        ...     VendorRules.from_json_file(Path("missing.json"))
        ... except ConfigError as e:
        ...     print(f"Bad config at {e.path}: {e}")
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the configuration file that caused the error
        """
        super().__init__(message)
        self.message = message
        self.path = path


class ModelNotFound(CatalogError, KeyError):
    """Raised when a composite key is not present in the registry.

    Recoverable: the caller decides on a fallback model.

    Examples:
        >>> try:
        ...     registry.get("openai/openai/gpt-missing")
        ... except ModelNotFound as e:
        ...     print(f"No model at {e.path}")
    """

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path
        self.message = f"Model not found: {path}"

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the key
        return self.message


class NormalizationError(CatalogError, ValueError):
    """Raised when an upstream model record lacks a required field.

    During ingestion the offending model is dropped and the rest of the batch
    still loads.
    """

    def __init__(self, message: str, provider_id: str, model_id: str) -> None:
        """Initialize normalization error.

        Args:
            message: Error message
            provider_id: Provider whose record failed
            model_id: Model whose record failed
        """
        super().__init__(message)
        self.message = message
        self.provider_id = provider_id
        self.model_id = model_id


class UpstreamDocumentError(CatalogError, ValueError):
    """Raised when the upstream catalog document is not a provider mapping.

    Nothing is published: the registry keeps serving its current snapshot.
    """


class TurnDecodeError(CatalogError, ValueError):
    """Base class for conversation turn decoding failures."""


class AmbiguousTurnShape(TurnDecodeError):
    """Raised when a wire value matches none of the four turn shapes."""


class MalformedTurn(TurnDecodeError):
    """Raised when a wire value matches a shape but a field of it is invalid."""


class ImageUrlError(CatalogError, ValueError):
    """Raised when an image URL cannot be turned into inline image data."""


__all__ = [
    "AmbiguousTurnShape",
    "CatalogError",
    "ConfigError",
    "ImageUrlError",
    "MalformedTurn",
    "ModelNotFound",
    "NormalizationError",
    "TurnDecodeError",
    "UpstreamDocumentError",
]

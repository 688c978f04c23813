"""Domain Layer - Catalog Normalization and Conversation Models.

Pure, I/O-free building blocks. Every value type is a frozen Pydantic model;
the only mutable object is the ModelRegistry, which publishes immutable
snapshots.

Key Components:
    - VendorResolver: ordered regex rules -> canonical vendor name
    - CapabilityDefaults: per-provider capability baselines
    - CatalogNormalizer: upstream record -> canonical Model
    - ModelRegistry: atomic snapshot store with filtered reads
    - ModelFilter: conjunctive predicate over Models
    - Conversation: append-only sequence of four untagged turn shapes

Design Principles:
    - Immutable by Default: frozen=True on every value type
    - Explicit Dependencies: static tables are loaded once and passed in
    - Structural Wire Format: turn shapes inferred from field presence
"""

from .capabilities import CapabilityDefaults, ProviderProfile
from .conversation import (
    BasicTurn,
    ContentEntry,
    ContentTurn,
    Conversation,
    FunctionCall,
    ImageEntry,
    ImageUrl,
    TextEntry,
    ToolCall,
    ToolCallsTurn,
    ToolOutputTurn,
    Turn,
    decode_turn,
)
from .domain_type import ContentEntryType, ConversationRole, DropReason, TurnKind
from .errors import (
    AmbiguousTurnShape,
    CatalogError,
    ConfigError,
    ImageUrlError,
    MalformedTurn,
    ModelNotFound,
    NormalizationError,
    TurnDecodeError,
    UpstreamDocumentError,
)
from .ingestion import DroppedRecord, DropSummary, IngestionReport
from .model import Capabilities, Cost, Model, ModelFilter, Properties, TokenUsage
from .normalizer import CatalogNormalizer
from .registry import ModelRegistry
from .upstream import ModelInfo, UpstreamProvider
from .vendor import VendorPattern, VendorResolver, VendorRules

__all__ = [
    "AmbiguousTurnShape",
    "BasicTurn",
    "Capabilities",
    "CapabilityDefaults",
    "CatalogError",
    "CatalogNormalizer",
    "ConfigError",
    "ContentEntry",
    "ContentEntryType",
    "ContentTurn",
    "Conversation",
    "ConversationRole",
    "Cost",
    "DropReason",
    "DropSummary",
    "DroppedRecord",
    "FunctionCall",
    "ImageEntry",
    "ImageUrl",
    "ImageUrlError",
    "IngestionReport",
    "MalformedTurn",
    "Model",
    "ModelFilter",
    "ModelInfo",
    "ModelNotFound",
    "ModelRegistry",
    "NormalizationError",
    "Properties",
    "ProviderProfile",
    "TextEntry",
    "TokenUsage",
    "ToolCall",
    "ToolCallsTurn",
    "ToolOutputTurn",
    "Turn",
    "TurnDecodeError",
    "TurnKind",
    "UpstreamDocumentError",
    "UpstreamProvider",
    "VendorPattern",
    "VendorResolver",
    "VendorRules",
    "decode_turn",
]

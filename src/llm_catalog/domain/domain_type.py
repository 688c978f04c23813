"""Domain Type System - Core Enumerations.

Defines type-safe constants using Python's StrEnum for domain concepts.
Using StrEnum instead of plain Enum provides automatic string coercion
and better JSON serialization without custom encoders.
"""

from enum import StrEnum


class ConversationRole(StrEnum):
    """Speaker of a conversation turn.

    Values are the lowercase role strings every chat-completions style API
    accepts on the wire.
    """

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    FUNCTION = "function"
    TOOL = "tool"


class TurnKind(StrEnum):
    """The four structural shapes a conversation turn can take.

    Never written to the wire. Decoding infers the kind from which fields
    are present (see ``decode_turn``).

    Kinds:
        BASIC: role + plain string content
        CONTENT: role + list of text/image entries
        TOOL_CALLS: assistant turn requesting one or more tool invocations
        TOOL_OUTPUT: tool turn answering a previous tool call
    """

    BASIC = "basic"
    CONTENT = "content"
    TOOL_CALLS = "tool_calls"
    TOOL_OUTPUT = "tool_output"


class ContentEntryType(StrEnum):
    """Informational ``type`` value emitted for content entries."""

    TEXT = "text"
    IMAGE_URL = "image_url"


class DropReason(StrEnum):
    """Why a record was left out of a catalog snapshot.

    Enables ingestion reports to group dropped records by cause.
    """

    NORMALIZATION = "normalization"
    MALFORMED_PROVIDER = "malformed_provider"


__all__ = [
    "ContentEntryType",
    "ConversationRole",
    "DropReason",
    "TurnKind",
]

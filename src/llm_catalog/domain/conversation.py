"""Conversation Model - Four Turn Shapes on an Untagged Wire.

A conversation is an ordered, append-only sequence of turns. Each turn is one
of four closed shapes, and the wire format carries no discriminator: the shape
is inferred from which fields are present.

Turn Shapes:
    BasicTurn:      {role, content: str}
    ContentTurn:    {role, content: [text | image entries]}
    ToolCallsTurn:  {role: assistant, content?, tool_calls: [...]}
    ToolOutputTurn: {role: tool, content?, tool_call_id}

Decoding Priority (first match wins):
    1. ``tool_calls`` present       -> ToolCallsTurn
    2. ``tool_call_id`` present     -> ToolOutputTurn
    3. ``content`` is a list        -> ContentTurn
    4. ``content`` is a string      -> BasicTurn
    otherwise                       -> AmbiguousTurnShape

Internally the Python class is the tag (``isinstance`` / ``kind``); encoding
never writes a tag, and the ``type`` field of content entries is emitted for
consumers but ignored on input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Annotated, Any, ClassVar, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
)

from .domain_type import ContentEntryType, ConversationRole, TurnKind
from .errors import AmbiguousTurnShape, MalformedTurn
from .images import DEFAULT_MEDIA_TYPE, InlineImage, parse_data_uri, to_data_uri
from .wire import delete_none_values

# ---------------------------------------------------------------------------
# Content entries
# ---------------------------------------------------------------------------


class ImageUrl(BaseModel):
    """Image reference: http(s) URL or ``data:`` URI, plus optional detail hint."""

    url: str
    detail: str | None = None

    model_config = ConfigDict(frozen=True)


class TextEntry(BaseModel):
    """Text part of a content turn."""

    text: str

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def type(self) -> str:
        return ContentEntryType.TEXT.value


class ImageEntry(BaseModel):
    """Image part of a content turn."""

    image_url: ImageUrl

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def type(self) -> str:
        return ContentEntryType.IMAGE_URL.value

    @classmethod
    def from_bytes(
        cls,
        image_bytes: bytes,
        media_type: str = DEFAULT_MEDIA_TYPE,
        detail: str | None = None,
    ) -> ImageEntry:
        """Build an entry carrying the image inline as a ``data:`` URI."""
        return cls(image_url=ImageUrl(url=to_data_uri(image_bytes, media_type), detail=detail))

    def inline(self) -> InlineImage:
        """Media type and base64 payload of an inline image.

        Raises:
            ImageUrlError: If the entry points at a remote URL
        """
        return parse_data_uri(self.image_url.url)


ContentEntry = TextEntry | ImageEntry


def decode_content_entry(value: Any) -> ContentEntry:
    """Infer a content entry from field presence (``text`` before ``image_url``).

    As with turns, a key holding ``null`` counts as absent.

    Raises:
        MalformedTurn: If the entry is not a mapping, has neither field, or is invalid
    """
    if isinstance(value, (TextEntry, ImageEntry)):
        return value
    if not isinstance(value, Mapping):
        raise MalformedTurn(f"Content entry must be a mapping, got {type(value).__name__}")

    entry_model: type[TextEntry] | type[ImageEntry]
    if value.get("text") is not None:
        entry_model = TextEntry
    elif value.get("image_url") is not None:
        entry_model = ImageEntry
    else:
        raise MalformedTurn("Content entry has neither 'text' nor 'image_url'")

    try:
        return entry_model.model_validate(value)
    except ValidationError as exc:
        raise MalformedTurn(f"Invalid {entry_model.__name__}: {_describe(exc)}") from exc


# ---------------------------------------------------------------------------
# Tool calls
# ---------------------------------------------------------------------------


class FunctionCall(BaseModel):
    """Function name plus its arguments as a JSON-encoded string."""

    name: str
    arguments: str

    model_config = ConfigDict(frozen=True)


class ToolCall(BaseModel):
    """One tool invocation requested by the assistant."""

    id: str
    type: str = "function"
    function: FunctionCall

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Turns
# ---------------------------------------------------------------------------


class _TurnBase(BaseModel):
    kind: ClassVar[TurnKind]

    model_config = ConfigDict(frozen=True)

    def to_wire(self) -> dict[str, Any]:
        """Untagged wire form with absent optional fields elided."""
        return delete_none_values(self.model_dump(mode="json"))


class BasicTurn(_TurnBase):
    """Role plus plain text."""

    kind: ClassVar[TurnKind] = TurnKind.BASIC

    role: ConversationRole
    content: str


class ContentTurn(_TurnBase):
    """Role plus an ordered list of text and image entries."""

    kind: ClassVar[TurnKind] = TurnKind.CONTENT

    role: ConversationRole
    content: tuple[Annotated[ContentEntry, BeforeValidator(decode_content_entry)], ...]

    @property
    def has_image(self) -> bool:
        return any(isinstance(entry, ImageEntry) for entry in self.content)


class ToolCallsTurn(_TurnBase):
    """Assistant turn invoking one or more tools."""

    kind: ClassVar[TurnKind] = TurnKind.TOOL_CALLS

    role: ConversationRole = ConversationRole.ASSISTANT
    content: str | None = None
    tool_calls: tuple[ToolCall, ...] = Field(min_length=1)

    @field_validator("role")
    @classmethod
    def require_assistant(cls, v: ConversationRole) -> ConversationRole:
        if v is not ConversationRole.ASSISTANT:
            raise ValueError(f"Tool calls must come from the assistant, not '{v.value}'")
        return v


class ToolOutputTurn(_TurnBase):
    """Tool turn answering the call identified by ``tool_call_id``."""

    kind: ClassVar[TurnKind] = TurnKind.TOOL_OUTPUT

    role: ConversationRole = ConversationRole.TOOL
    content: str | None = None
    tool_call_id: str

    @field_validator("role")
    @classmethod
    def require_tool(cls, v: ConversationRole) -> ConversationRole:
        if v is not ConversationRole.TOOL:
            raise ValueError(f"Tool output must use the tool role, not '{v.value}'")
        return v


Turn = BasicTurn | ContentTurn | ToolCallsTurn | ToolOutputTurn

_TURN_TYPES = (BasicTurn, ContentTurn, ToolCallsTurn, ToolOutputTurn)

TurnT = TypeVar("TurnT", bound=_TurnBase)


def decode_turn(value: Any) -> Turn:
    """Decode one wire value into exactly one turn shape.

    A key holding ``null`` counts as absent, matching the encoder which never
    emits nulls.

    Raises:
        AmbiguousTurnShape: If no shape predicate matches
        MalformedTurn: If the matched shape has an invalid field

    Example:
        >>> decode_turn({"role": "tool", "tool_call_id": "call_1", "content": "42"})
        ToolOutputTurn(role=<ConversationRole.TOOL: 'tool'>, content='42', tool_call_id='call_1')
    """
    if isinstance(value, _TURN_TYPES):
        return value
    if not isinstance(value, Mapping):
        raise AmbiguousTurnShape(f"Turn must be a mapping, got {type(value).__name__}")

    if value.get("tool_calls") is not None:
        return _validate_turn(ToolCallsTurn, value)
    if value.get("tool_call_id") is not None:
        return _validate_turn(ToolOutputTurn, value)

    content = value.get("content")
    if isinstance(content, (list, tuple)):
        entries = tuple(decode_content_entry(entry) for entry in content)
        return _validate_turn(ContentTurn, {**value, "content": entries})
    if isinstance(content, str):
        return _validate_turn(BasicTurn, value)

    raise AmbiguousTurnShape(
        "Turn matches no known shape: expected 'tool_calls', 'tool_call_id', or list/string 'content'"
    )


def _validate_turn(turn_model: type[TurnT], value: Mapping[str, Any]) -> TurnT:
    try:
        return turn_model.model_validate(value)
    except ValidationError as exc:
        raise MalformedTurn(f"Malformed {turn_model.kind.value} turn: {_describe(exc)}") from exc


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<value>'}: {err['msg']}" for err in exc.errors()
    )


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


class Conversation(BaseModel):
    """Ordered, append-only sequence of turns.

    Immutable: ``append`` returns a new Conversation and leaves the original
    unchanged, so one instance can be shared safely between threads.

    Example:
        >>> conversation = Conversation().append(BasicTurn(role="user", content="Hi"))
        >>> conversation.to_wire()
        [{'role': 'user', 'content': 'Hi'}]
        >>> Conversation.from_wire(conversation.to_wire()) == conversation
        True
    """

    turns: tuple[Annotated[Turn, BeforeValidator(decode_turn)], ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_wire(cls, turns: Iterable[Any]) -> Conversation:
        """Decode a wire-form turn list.

        Raises:
            AmbiguousTurnShape: If a turn matches no shape
            MalformedTurn: If a turn matches a shape but is invalid
        """
        return cls(turns=tuple(decode_turn(turn) for turn in turns))

    def to_wire(self) -> list[dict[str, Any]]:
        return [turn.to_wire() for turn in self.turns]

    def append(self, turn: Turn) -> Conversation:
        return self.model_copy(update={"turns": (*self.turns, turn)})

    @property
    def last_turn(self) -> Turn | None:
        return self.turns[-1] if self.turns else None

    @property
    def is_empty(self) -> bool:
        return not self.turns

    def is_last_turn_vision_query(self) -> bool:
        """True iff the final turn is a ContentTurn with at least one image."""
        last = self.last_turn
        return isinstance(last, ContentTurn) and last.has_image

    def __len__(self) -> int:
        return len(self.turns)


__all__ = [
    "BasicTurn",
    "ContentEntry",
    "ContentTurn",
    "Conversation",
    "FunctionCall",
    "ImageEntry",
    "ImageUrl",
    "TextEntry",
    "ToolCall",
    "ToolCallsTurn",
    "ToolOutputTurn",
    "Turn",
    "decode_content_entry",
    "decode_turn",
]

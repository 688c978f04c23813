"""Canonical Model Schema - One Shape for Every Provider's Models.

Provides the immutable, validated representation the catalog serves to
callers, whatever naming and capability conventions the upstream catalog used.

Architecture:
    Model: Canonical entity, keyed by its computed ``path``
    ├─ Cost: Prices per single token (normalized from per-million upstream)
    ├─ Capabilities: 18 boolean feature flags with permissive defaults
    └─ Properties: Provenance and compliance flags
    ModelFilter: Conjunctive equality predicate over Models
    TokenUsage: Token counts a Cost can price

Key Features:
    - Derived Key: ``provider/vendor/name`` is computed, never stored
    - Type Safety: frozen models prevent mutation after normalization
    - Exact Pricing: per-token prices are plain float division of upstream prices
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, computed_field

PER_MILLION = 1_000_000


class Cost(BaseModel):
    """Prices per single token (and per request) in USD.

    Attributes:
        prompt: Price of one input token
        completion: Price of one output token
        request: Flat price per request
        cache_read: Price of one cached input token, if the provider bills it
        cache_write: Price of writing one token to the prompt cache, if billed
    """

    prompt: float = 0.0
    completion: float = 0.0
    request: float = 0.0
    cache_read: float | None = None
    cache_write: float | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_per_million(
        cls,
        input_per_million: float,
        output_per_million: float,
        cache_read_per_million: float | None = None,
        cache_write_per_million: float | None = None,
    ) -> Cost:
        """Convert upstream per-million-token prices to per-token prices.

        Uses exact float division so that multiplying by raw token counts
        downstream gives the same totals the upstream prices imply.

        Example:
            >>> Cost.from_per_million(0.15, 0.6).prompt == 0.15 / 1_000_000
            True
        """
        return cls(
            prompt=input_per_million / PER_MILLION,
            completion=output_per_million / PER_MILLION,
            request=0.0,
            cache_read=None if cache_read_per_million is None else cache_read_per_million / PER_MILLION,
            cache_write=None if cache_write_per_million is None else cache_write_per_million / PER_MILLION,
        )

    def calculate(self, prompt_tokens: int, completion_tokens: int) -> float:
        """Total price of one request with the given token counts."""
        return self.prompt * prompt_tokens + self.completion * completion_tokens + self.request


class TokenUsage(BaseModel):
    """Token counts reported for one completion."""

    prompt_tokens: int = Field(ge=0)
    completion_tokens: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class Capabilities(BaseModel):
    """Feature flags describing what a model's API accepts.

    Every flag defaults to permissive ``True`` except vision, tools,
    tool_choice and tool_choice_required: most text models lack multimodal
    and tool features unless the upstream catalog says otherwise.

    Attributes:
        supports_user: Accepts the ``user`` request field
        supports_repeating_roles: Accepts two consecutive turns with the same role
        supports_streaming: Can stream responses
        supports_vision: Accepts image content entries
        supports_tools: Accepts tool definitions
        supports_n: Accepts ``n`` > 1 completions per request
        supports_system: Accepts a system turn
        supports_multiple_system: Accepts more than one system turn
        supports_empty_content: Accepts turns with empty content
        supports_tool_choice: Accepts ``tool_choice``
        supports_tool_choice_required: Accepts ``tool_choice="required"``
        supports_json_output: Accepts a JSON response format
        supports_json_content: Accepts JSON strings as content
        supports_last_assistant: Accepts a conversation ending on an assistant turn
        supports_first_assistant: Accepts a conversation starting with an assistant turn
        supports_temperature: Accepts ``temperature``
        supports_only_system: Accepts a conversation made only of system turns
        supports_only_assistant: Accepts a conversation made only of assistant turns
    """

    supports_user: bool = True
    supports_repeating_roles: bool = True
    supports_streaming: bool = True
    supports_vision: bool = False
    supports_tools: bool = False
    supports_n: bool = True
    supports_system: bool = True
    supports_multiple_system: bool = True
    supports_empty_content: bool = True
    supports_tool_choice: bool = False
    supports_tool_choice_required: bool = False
    supports_json_output: bool = True
    supports_json_content: bool = True
    supports_last_assistant: bool = True
    supports_first_assistant: bool = True
    supports_temperature: bool = True
    supports_only_system: bool = True
    supports_only_assistant: bool = True

    model_config = ConfigDict(frozen=True, extra="forbid")


class Properties(BaseModel):
    """Provenance and compliance flags for a model."""

    open_source: bool = False
    chinese: bool = False
    gdpr_compliant: bool = False
    is_nsfw: bool = False

    model_config = ConfigDict(frozen=True)


class Model(BaseModel):
    """Canonical Model Entity.

    One hosted model as served by one provider. Immutable once normalized.

    Attributes:
        provider_name: Organization hosting the model (e.g., "openrouter")
        vendor_name: Organization that created the model (e.g., "anthropic")
        name: Provider's model identifier (e.g., "gpt-4o-mini")
        cost: Per-token prices
        context_length: Maximum input tokens
        completion_length: Maximum output tokens, when known
        capabilities: Feature flags
        properties: Provenance/compliance flags
        display_name: Human-readable name from the upstream catalog
        knowledge_cutoff: Training data cutoff as published upstream
        release_date: First release date as published upstream
        last_updated: Last upstream update date

    Key Invariant:
        ``path`` is derived from provider/vendor/name on every access, so it
        can never disagree with them. Two Models with the same path are the
        same logical model.
    """

    provider_name: str
    vendor_name: str
    name: str
    cost: Cost = Field(default_factory=Cost)
    context_length: PositiveInt
    completion_length: PositiveInt | None = None
    capabilities: Capabilities = Field(default_factory=Capabilities)
    properties: Properties = Field(default_factory=Properties)
    display_name: str | None = None
    knowledge_cutoff: str | None = None
    release_date: str | None = None
    last_updated: str | None = None

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def path(self) -> str:
        """Composite key ``provider/vendor/name``.

        Example:
            >>> model.path
            'openrouter/anthropic/anthropic/claude-sonnet-4'
        """
        return model_path(self.provider_name, self.vendor_name, self.name)

    def calculate_cost(self, usage: TokenUsage) -> float:
        """Price a completion with this model's per-token costs."""
        return self.cost.calculate(usage.prompt_tokens, usage.completion_tokens)


def model_path(provider_name: str, vendor_name: str, name: str) -> str:
    return f"{provider_name}/{vendor_name}/{name}"


class ModelFilter(BaseModel):
    """Conjunctive predicate over Models.

    Each constraint that is set must equal the Model's corresponding field;
    constraints left as None are vacuously satisfied. An empty filter
    matches every Model.

    Example:
        >>> vision_tools = ModelFilter().with_vision(True).with_tools(True)
        >>> [m.path for m in registry.list_models(vision_tools)]
    """

    provider: str | None = None
    supports_vision: bool | None = None
    supports_tools: bool | None = None
    supports_streaming: bool | None = None
    supports_temperature: bool | None = None

    model_config = ConfigDict(frozen=True)

    def with_provider(self, provider: str) -> ModelFilter:
        return self.model_copy(update={"provider": provider})

    def with_vision(self, value: bool) -> ModelFilter:
        return self.model_copy(update={"supports_vision": value})

    def with_tools(self, value: bool) -> ModelFilter:
        return self.model_copy(update={"supports_tools": value})

    def with_streaming(self, value: bool) -> ModelFilter:
        return self.model_copy(update={"supports_streaming": value})

    def with_temperature(self, value: bool) -> ModelFilter:
        return self.model_copy(update={"supports_temperature": value})

    def matches(self, model: Model) -> bool:
        if self.provider is not None and model.provider_name != self.provider:
            return False
        caps = model.capabilities
        checks = (
            (self.supports_vision, caps.supports_vision),
            (self.supports_tools, caps.supports_tools),
            (self.supports_streaming, caps.supports_streaming),
            (self.supports_temperature, caps.supports_temperature),
        )
        return all(wanted is None or wanted == actual for wanted, actual in checks)


__all__ = [
    "Capabilities",
    "Cost",
    "Model",
    "ModelFilter",
    "PER_MILLION",
    "Properties",
    "TokenUsage",
    "model_path",
]

# src/openrouter_kit/chat/assembler.py

"""Request assembly for ``chat/completions``.

Pure functions from inputs to a send-ready ``ChatCompletionRequest`` or a
``ValidationError``. No network I/O happens here, so every failure mode can
be exercised without a live endpoint.

Validation is all-or-nothing: the first problem found aborts the build.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from openrouter_kit.errors import (
    ConflictingProviderPreference,
    DuplicateToolName,
    InvalidRequest,
    InvalidToolSchema,
    RequiredPropertyMissing,
)

from ._tool_schema import ToolLike, tools_to_openrouter_schema
from .base import ChatCompletionRequest, Message, Role
from .schema import (
    FunctionTool,
    ProviderPreferences,
    ResponseFormat,
    StructuredOutputSpec,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "openai/gpt-4"


def build_request(
    messages: Sequence[Message],
    *,
    model: str = DEFAULT_MODEL,
    tools: Sequence[ToolLike] | None = None,
    structured_output: StructuredOutputSpec | None = None,
    provider: ProviderPreferences | None = None,
    models: Sequence[str] | None = None,
    transforms: Sequence[str] | None = None,
    stream: bool | None = None,
    temperature: float | None = None,
    max_tokens: int | None = None,
) -> ChatCompletionRequest:
    """Validate the inputs and assemble a request.

    Args:
        messages: Complete conversation, in order. Must not be empty.
        model: Model id, e.g. ``"openai/gpt-4o"``.
        tools: Tools the model may call. Names must be unique.
        structured_output: Schema the response must conform to.
        provider: Provider routing preferences.
        models: Fallback model ids tried in order.
        transforms: Prompt transforms to apply server-side.
        stream: Streaming flag, passed through.
        temperature: Sampling temperature, 0.0 to 2.0.
        max_tokens: Maximum tokens in the response.

    Returns:
        An immutable, send-ready ``ChatCompletionRequest``.

    Raises:
        ValidationError: A subclass naming the first problem found.
    """
    if not model or not model.strip():
        raise InvalidRequest("Model id must not be empty")
    _validate_messages(messages)

    function_tools = (
        validate_tools(tools_to_openrouter_schema(tools)) if tools else None
    )
    response_format = (
        ResponseFormat(json_schema=validate_structured_output(structured_output))
        if structured_output is not None
        else None
    )
    if provider is not None:
        provider = validate_provider_preferences(provider)

    if temperature is not None and not 0.0 <= temperature <= 2.0:
        raise InvalidRequest(
            f"Temperature must be within [0.0, 2.0], got {temperature}"
        )
    if max_tokens is not None and max_tokens < 1:
        raise InvalidRequest(f"max_tokens must be positive, got {max_tokens}")

    request = ChatCompletionRequest(
        model=model,
        messages=list(messages),
        tools=function_tools,
        response_format=response_format,
        provider=provider,
        models=_non_empty_ids("models", models),
        transforms=_non_empty_ids("transforms", transforms),
        stream=stream,
        temperature=temperature,
        max_tokens=max_tokens,
    )
    logger.debug(
        "Assembled request: model=%s, messages=%d, tools=%d, structured=%s",
        model,
        len(request.messages),
        len(function_tools) if function_tools else 0,
        response_format is not None,
    )
    return request


def _validate_messages(messages: Sequence[Message]) -> None:
    if not messages:
        raise InvalidRequest("At least one message is required")
    for position, message in enumerate(messages):
        if message.role is Role.TOOL and not message.tool_call_id:
            raise InvalidRequest(
                f"Tool message at position {position} has no tool_call_id"
            )


def _non_empty_ids(field: str, values: Sequence[str] | None) -> list[str] | None:
    if not values:
        return None
    for value in values:
        if not value or not value.strip():
            raise InvalidRequest(f"'{field}' must not contain empty ids")
    return list(values)


# ============================================================================
# Tools
# ============================================================================


def validate_tools(tools: Sequence[FunctionTool]) -> list[FunctionTool]:
    """Check tool names are unique and parameters are object schemas."""
    seen: set[str] = set()
    for tool in tools:
        if not isinstance(tool, FunctionTool):
            raise InvalidToolSchema(repr(tool), "unsupported tool variant")
        name = tool.function.name
        if not name or not name.strip():
            raise InvalidToolSchema(name, "name must not be empty")
        if name in seen:
            raise DuplicateToolName(name)
        seen.add(name)
        _check_parameters_schema(name, tool.function.parameters)
    return list(tools)


def _check_parameters_schema(name: str, parameters: dict[str, Any]) -> None:
    # ToolDescriptor already rejects non-mapping parameters at construction.
    if parameters.get("type") != "object":
        raise InvalidToolSchema(name, "root 'type' must be 'object'")

    properties = parameters.get("properties", {})
    if not isinstance(properties, dict):
        raise InvalidToolSchema(name, "'properties' must be an object")
    for prop_name, prop_schema in properties.items():
        if not isinstance(prop_schema, (dict, bool)):
            raise InvalidToolSchema(
                name, f"property '{prop_name}' must be a schema object"
            )

    required = parameters.get("required")
    if required is not None and (
        not isinstance(required, list)
        or not all(isinstance(item, str) for item in required)
    ):
        raise InvalidToolSchema(name, "'required' must be a list of names")

    additional = parameters.get("additionalProperties")
    if additional is not None and not isinstance(additional, (bool, dict)):
        raise InvalidToolSchema(
            name, "'additionalProperties' must be a boolean or a schema"
        )


# ============================================================================
# Structured output
# ============================================================================


def validate_structured_output(spec: StructuredOutputSpec) -> StructuredOutputSpec:
    """Check a structured-output spec and apply strict-mode defaults.

    Under strict mode every required name must be a declared property, and
    ``additionalProperties`` becomes ``false`` unless set explicitly.
    """
    if not spec.schema_name or not spec.schema_name.strip():
        raise InvalidRequest("Structured output schema name must not be empty")
    if not spec.strict:
        return spec

    schema = spec.json_schema
    missing = [name for name in schema.required or [] if name not in schema.properties]
    if missing:
        raise RequiredPropertyMissing(spec.schema_name, missing)

    if schema.additional_properties is None:
        schema = schema.model_copy(update={"additional_properties": False})
        spec = spec.model_copy(update={"json_schema": schema})
    return spec


# ============================================================================
# Provider preferences
# ============================================================================


def validate_provider_preferences(prefs: ProviderPreferences) -> ProviderPreferences:
    """Reject providers that are both preferred and ignored.

    An empty ``order`` means "no preference" and is dropped.
    """
    ignored = set(prefs.ignore or [])
    conflicts = [provider for provider in prefs.order or [] if provider in ignored]
    if conflicts:
        raise ConflictingProviderPreference(conflicts)
    if prefs.order is not None and not prefs.order:
        prefs = prefs.model_copy(update={"order": None})
    return prefs


# ============================================================================
# Fluent builder
# ============================================================================


@dataclass(frozen=True)
class RequestBuilder:
    """Immutable fluent front-end to ``build_request``.

    Every ``with_*`` call returns a new builder, so a partially configured
    builder can be reused as a template.

    Example:
        >>> request = (
        ...     completion_request([Message(role=Role.USER, content="Hi")])
        ...     .with_tools([weather_tool])
        ...     .build()
        ... )
    """

    messages: tuple[Message, ...]
    model: str = DEFAULT_MODEL
    tools: tuple[ToolLike, ...] | None = None
    structured_output: StructuredOutputSpec | None = None
    provider: ProviderPreferences | None = None
    models: tuple[str, ...] | None = None
    transforms: tuple[str, ...] | None = None
    stream: bool | None = None
    temperature: float | None = None
    max_tokens: int | None = None

    def with_model(self, model: str) -> "RequestBuilder":
        return replace(self, model=model)

    def with_tools(self, tools: Sequence[ToolLike]) -> "RequestBuilder":
        return replace(self, tools=tuple(tools))

    def with_structured_output(self, spec: StructuredOutputSpec) -> "RequestBuilder":
        return replace(self, structured_output=spec)

    def with_provider(self, provider: ProviderPreferences) -> "RequestBuilder":
        return replace(self, provider=provider)

    def with_models(self, models: Sequence[str]) -> "RequestBuilder":
        return replace(self, models=tuple(models))

    def with_transforms(self, transforms: Sequence[str]) -> "RequestBuilder":
        return replace(self, transforms=tuple(transforms))

    def with_stream(self, stream: bool = True) -> "RequestBuilder":
        return replace(self, stream=stream)

    def with_temperature(self, temperature: float) -> "RequestBuilder":
        return replace(self, temperature=temperature)

    def with_max_tokens(self, max_tokens: int) -> "RequestBuilder":
        return replace(self, max_tokens=max_tokens)

    def build(self) -> ChatCompletionRequest:
        return build_request(
            self.messages,
            model=self.model,
            tools=self.tools,
            structured_output=self.structured_output,
            provider=self.provider,
            models=self.models,
            transforms=self.transforms,
            stream=self.stream,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


def completion_request(
    messages: Sequence[Message], model: str = DEFAULT_MODEL
) -> RequestBuilder:
    """Start a fluent request for ``messages``."""
    return RequestBuilder(messages=tuple(messages), model=model)

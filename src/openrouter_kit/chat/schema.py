# src/openrouter_kit/chat/schema.py

"""Capability descriptors and routing preferences.

Value types only. Shape checks that span several fields (unique tool names,
strict schema completeness, provider conflicts) live in the assembler.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """A function the model may call.

    Immutable. Shared freely across requests.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    description: str | None = None
    parameters: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    @classmethod
    def from_model(
        cls,
        name: str,
        input_schema: type[BaseModel],
        description: str | None = None,
    ) -> "ToolDescriptor":
        """Describe a tool whose arguments are a pydantic model."""
        return cls(
            name=name,
            description=description,
            parameters=input_schema.model_json_schema(),
        )


class FunctionTool(BaseModel):
    """Wire form of a tool. ``type`` tags the variant."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["function"] = "function"
    function: ToolDescriptor

    @property
    def name(self) -> str:
        return self.function.name


class JsonSchemaDefinition(BaseModel):
    """Root of a structured-output schema.

    Keywords other than the four modelled here (``$defs``, ``title``,
    ``description``...) are kept as extras and sent unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    type: str = "object"
    properties: dict[str, Any] = Field(default_factory=dict)
    required: list[str] | None = None
    additional_properties: bool | None = Field(
        default=None, alias="additionalProperties"
    )


class StructuredOutputSpec(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    schema_name: str = Field(alias="name")
    strict: bool = False
    json_schema: JsonSchemaDefinition = Field(alias="schema")

    @classmethod
    def from_model(
        cls,
        name: str,
        output_type: type[BaseModel],
        strict: bool = True,
    ) -> "StructuredOutputSpec":
        return cls(
            schema_name=name,
            strict=strict,
            json_schema=JsonSchemaDefinition.model_validate(
                output_type.model_json_schema()
            ),
        )


class ResponseFormat(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["json_schema"] = "json_schema"
    json_schema: StructuredOutputSpec


class ProviderPreferences(BaseModel):
    """Routing hints for which upstream providers may serve a request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    order: list[str] | None = None
    allow_fallbacks: bool | None = None
    require_parameters: bool | None = None
    data_collection: Literal["allow", "deny"] | None = None
    ignore: list[str] | None = None

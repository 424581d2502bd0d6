import pydantic
import pytest
from pydantic import BaseModel

from openrouter_kit.chat.assembler import (
    DEFAULT_MODEL,
    RequestBuilder,
    build_request,
    completion_request,
)
from openrouter_kit.chat.base import Message, Role
from openrouter_kit.chat.schema import (
    FunctionTool,
    JsonSchemaDefinition,
    ProviderPreferences,
    StructuredOutputSpec,
    ToolDescriptor,
)
from openrouter_kit.errors import (
    ConflictingProviderPreference,
    DuplicateToolName,
    InvalidRequest,
    InvalidToolSchema,
    RequiredPropertyMissing,
    ValidationError,
)
from openrouter_kit.tools.tool import Tool

HELLO = [Message(role=Role.USER, content="Hello, world!")]


class WeatherInput(BaseModel):
    city: str


def _tool(name: str) -> ToolDescriptor:
    return ToolDescriptor(
        name=name,
        description=f"Tool {name}",
        parameters={"type": "object", "properties": {"x": {"type": "string"}}},
    )


def _strict_spec(properties: dict, required: list[str]) -> StructuredOutputSpec:
    return StructuredOutputSpec(
        schema_name="answer",
        strict=True,
        json_schema=JsonSchemaDefinition(properties=properties, required=required),
    )


class TestBuildRequest:
    def test_minimal_request(self) -> None:
        request = build_request(HELLO)

        assert request.model == DEFAULT_MODEL
        assert request.messages == HELLO
        assert request.tools is None
        assert request.response_format is None
        assert request.provider is None

    def test_empty_messages_rejected(self) -> None:
        with pytest.raises(InvalidRequest, match="At least one message"):
            build_request([])

    def test_empty_model_rejected(self) -> None:
        with pytest.raises(InvalidRequest, match="Model id"):
            build_request(HELLO, model="  ")

    def test_tool_message_requires_call_id(self) -> None:
        messages = [*HELLO, Message(role=Role.TOOL, content="42")]
        with pytest.raises(InvalidRequest, match="tool_call_id"):
            build_request(messages)

    @pytest.mark.parametrize("temperature", [-0.1, 2.5])
    def test_temperature_out_of_range(self, temperature: float) -> None:
        with pytest.raises(InvalidRequest):
            build_request(HELLO, temperature=temperature)

    def test_fallback_models_and_transforms_pass_through(self) -> None:
        request = build_request(
            HELLO,
            models=["anthropic/claude-3.5-sonnet", "openai/gpt-4o"],
            transforms=["middle-out"],
            stream=False,
        )

        assert request.models == ["anthropic/claude-3.5-sonnet", "openai/gpt-4o"]
        assert request.transforms == ["middle-out"]
        assert request.stream is False

    def test_empty_fallback_id_rejected(self) -> None:
        with pytest.raises(InvalidRequest):
            build_request(HELLO, models=["openai/gpt-4o", ""])

    def test_validation_errors_share_a_base_class(self) -> None:
        with pytest.raises(ValidationError):
            build_request([])


class TestToolValidation:
    def test_duplicate_tool_names_rejected(self) -> None:
        with pytest.raises(DuplicateToolName) as exc_info:
            build_request(HELLO, tools=[_tool("a"), _tool("a")])
        assert exc_info.value.name == "a"

    def test_distinct_tool_names_accepted(self) -> None:
        request = build_request(HELLO, tools=[_tool("a"), _tool("b")])

        assert request.tools is not None
        assert [tool.name for tool in request.tools] == ["a", "b"]
        assert all(tool.type == "function" for tool in request.tools)

    @pytest.mark.parametrize(
        "parameters",
        [
            {},
            {"type": "string"},
            {"type": "object", "properties": []},
            {"type": "object", "properties": {"x": 3}},
            {"type": "object", "required": "x"},
            {"type": "object", "additionalProperties": "no"},
        ],
    )
    def test_non_object_schema_rejected(self, parameters: dict) -> None:
        tool = ToolDescriptor(name="bad", parameters=parameters)
        with pytest.raises(InvalidToolSchema, match="bad"):
            build_request(HELLO, tools=[tool])

    def test_non_mapping_parameters_rejected_by_descriptor(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ToolDescriptor(name="bad", parameters=["type", "object"])

    def test_empty_tool_name_rejected(self) -> None:
        with pytest.raises(InvalidToolSchema):
            build_request(HELLO, tools=[_tool("")])

    def test_mixed_tool_definitions_are_normalized(self) -> None:
        executable = Tool(
            name="get_weather",
            description="Get weather for a city",
            input_schema=WeatherInput,
            handler=lambda args: "sunny",
        )
        request = build_request(
            HELLO, tools=[_tool("a"), FunctionTool(function=_tool("b")), executable]
        )

        assert request.tools is not None
        assert [tool.name for tool in request.tools] == ["a", "b", "get_weather"]

    def test_duplicates_across_definition_kinds_rejected(self) -> None:
        with pytest.raises(DuplicateToolName):
            build_request(HELLO, tools=[_tool("a"), FunctionTool(function=_tool("a"))])

    def test_unsupported_tool_object_rejected(self) -> None:
        with pytest.raises(InvalidToolSchema):
            build_request(HELLO, tools=[{"name": "a"}])  # type: ignore[list-item]


class TestStructuredOutput:
    def test_strict_requires_declared_properties(self) -> None:
        spec = _strict_spec(properties={}, required=["result"])

        with pytest.raises(RequiredPropertyMissing) as exc_info:
            build_request(HELLO, structured_output=spec)
        assert exc_info.value.missing == ["result"]

    def test_strict_with_declared_properties_succeeds(self) -> None:
        spec = _strict_spec(
            properties={"result": {"type": "string"}}, required=["result"]
        )

        request = build_request(HELLO, structured_output=spec)

        assert request.response_format is not None
        assert request.response_format.type == "json_schema"
        assert request.response_format.json_schema.schema_name == "answer"

    def test_strict_defaults_additional_properties_to_false(self) -> None:
        spec = _strict_spec(properties={"result": {"type": "string"}}, required=[])

        request = build_request(HELLO, structured_output=spec)

        assert request.response_format is not None
        schema = request.response_format.json_schema.json_schema
        assert schema.additional_properties is False
        # the caller's spec is left untouched
        assert spec.json_schema.additional_properties is None

    def test_strict_keeps_explicit_additional_properties(self) -> None:
        spec = StructuredOutputSpec(
            schema_name="answer",
            strict=True,
            json_schema=JsonSchemaDefinition(
                properties={"result": {"type": "string"}},
                additional_properties=True,
            ),
        )

        request = build_request(HELLO, structured_output=spec)

        assert request.response_format is not None
        assert request.response_format.json_schema.json_schema.additional_properties

    def test_non_strict_skips_completeness_check(self) -> None:
        spec = StructuredOutputSpec(
            schema_name="answer",
            strict=False,
            json_schema=JsonSchemaDefinition(properties={}, required=["result"]),
        )

        request = build_request(HELLO, structured_output=spec)

        assert request.response_format is not None
        schema = request.response_format.json_schema.json_schema
        assert schema.additional_properties is None

    def test_spec_from_pydantic_model(self) -> None:
        spec = StructuredOutputSpec.from_model("weather", WeatherInput)

        request = build_request(HELLO, structured_output=spec)

        assert request.response_format is not None
        schema = request.response_format.json_schema.json_schema
        assert "city" in schema.properties
        assert schema.required == ["city"]


class TestProviderPreferences:
    def test_conflicting_order_and_ignore_rejected(self) -> None:
        prefs = ProviderPreferences(order=["openai", "together"], ignore=["together"])

        with pytest.raises(ConflictingProviderPreference) as exc_info:
            build_request(HELLO, provider=prefs)
        assert exc_info.value.providers == ["together"]

    def test_empty_order_means_no_preference(self) -> None:
        prefs = ProviderPreferences(order=[], ignore=["together"])

        request = build_request(HELLO, provider=prefs)

        assert request.provider is not None
        assert request.provider.order is None
        assert request.provider.ignore == ["together"]

    def test_disjoint_preferences_accepted(self) -> None:
        prefs = ProviderPreferences(
            order=["openai"],
            ignore=["together"],
            allow_fallbacks=False,
            data_collection="deny",
        )

        request = build_request(HELLO, provider=prefs)

        assert request.provider == prefs


class TestRequestBuilder:
    def test_fluent_build(self) -> None:
        request = (
            completion_request(HELLO, model="openai/gpt-4o")
            .with_tools([_tool("a")])
            .with_structured_output(
                _strict_spec({"result": {"type": "string"}}, ["result"])
            )
            .with_provider(ProviderPreferences(order=["openai"]))
            .with_models(["openai/gpt-4o-mini"])
            .with_max_tokens(256)
            .build()
        )

        assert request.model == "openai/gpt-4o"
        assert request.tools is not None and len(request.tools) == 1
        assert request.response_format is not None
        assert request.provider is not None
        assert request.models == ["openai/gpt-4o-mini"]
        assert request.max_tokens == 256

    def test_builder_is_immutable(self) -> None:
        base = completion_request(HELLO)
        with_tools = base.with_tools([_tool("a")])

        assert base.tools is None
        assert with_tools is not base
        assert base.build().tools is None

    def test_build_runs_validation(self) -> None:
        builder = RequestBuilder(messages=tuple(HELLO)).with_tools(
            [_tool("a"), _tool("a")]
        )
        with pytest.raises(DuplicateToolName):
            builder.build()

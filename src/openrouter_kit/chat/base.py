# src/openrouter_kit/chat/base.py

import json
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from openrouter_kit.errors import DecodeError

from .schema import FunctionTool, ProviderPreferences, ResponseFormat


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FunctionCall(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    arguments: str = ""


class ToolCall(BaseModel):
    """A function invocation emitted by the model.

    ``arguments`` stays the raw JSON text the model produced so the call can
    be replayed byte for byte.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    type: Literal["function"] = "function"
    function: FunctionCall

    @property
    def function_name(self) -> str:
        return self.function.name

    @property
    def arguments(self) -> str:
        return self.function.arguments

    def parsed_arguments(self) -> dict[str, Any]:
        """Decode the arguments into a dict.

        An empty string means "no arguments".

        Raises:
            DecodeError: If the text is not a JSON object.
        """
        raw = self.function.arguments.strip()
        if not raw:
            return {}
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(
                f"Arguments of tool call '{self.id}' are not valid JSON", raw
            ) from exc
        if not isinstance(value, dict):
            raise DecodeError(
                f"Arguments of tool call '{self.id}' are not a JSON object", raw
            )
        return value


class Message(BaseModel):
    """A single message in the conversation.

    Immutable. Provider-agnostic.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    role: Role
    content: str | None = None
    name: str | None = None
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None  # Required when role=TOOL


class Usage(BaseModel):
    """Token usage for a completion."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class Choice(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    index: int = 0
    message: Message
    finish_reason: str | None = None


class ChatCompletionRequest(BaseModel):
    """Send-ready payload for ``chat/completions``.

    Build it with ``build_request`` or ``RequestBuilder`` so the assembly
    checks run; constructing it directly skips them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    model: str
    messages: list[Message]
    tools: list[FunctionTool] | None = None
    response_format: ResponseFormat | None = None
    provider: ProviderPreferences | None = None
    models: list[str] | None = None
    transforms: list[str] | None = None
    stream: bool | None = None
    temperature: float | None = None
    max_tokens: int | None = None


class ChatCompletionResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    model: str
    choices: list[Choice]
    usage: Usage

    @property
    def content(self) -> str | None:
        """Content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content

    @property
    def tool_calls(self) -> list[ToolCall]:
        """Tool calls of the first choice, in emission order."""
        if not self.choices:
            return []
        return list(self.choices[0].message.tool_calls or [])

# src/openrouter_kit/chat/__init__.py

"""Chat completion data model and request assembly.

Example:
    >>> from openrouter_kit.chat import (
    ...     Message, ProviderPreferences, Role, completion_request
    ... )
    >>>
    >>> request = (
    ...     completion_request([Message(role=Role.USER, content="Hello!")])
    ...     .with_provider(ProviderPreferences(order=["openai"]))
    ...     .build()
    ... )
"""

from .assembler import DEFAULT_MODEL, RequestBuilder, build_request, completion_request
from .base import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    FunctionCall,
    Message,
    Role,
    ToolCall,
    Usage,
)
from .schema import (
    FunctionTool,
    JsonSchemaDefinition,
    ProviderPreferences,
    ResponseFormat,
    StructuredOutputSpec,
    ToolDescriptor,
)

__all__ = [
    # Assembly
    "DEFAULT_MODEL",
    "RequestBuilder",
    "build_request",
    "completion_request",
    # Messages
    "Message",
    "Role",
    "ToolCall",
    "FunctionCall",
    # Request / response
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Choice",
    "Usage",
    # Descriptors
    "FunctionTool",
    "JsonSchemaDefinition",
    "ProviderPreferences",
    "ResponseFormat",
    "StructuredOutputSpec",
    "ToolDescriptor",
]

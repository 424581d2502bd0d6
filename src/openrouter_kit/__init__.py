# Chat
from .chat import (
    DEFAULT_MODEL,
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    FunctionTool,
    JsonSchemaDefinition,
    Message,
    ProviderPreferences,
    RequestBuilder,
    Role,
    StructuredOutputSpec,
    ToolCall,
    ToolDescriptor,
    Usage,
    build_request,
    completion_request,
)

# Client
from .client import NoAuthClient, OpenRouterClient, ReadyClient
from .config import DEFAULT_BASE_URL, ClientConfig
from .factory import OpenRouterConfig, create_client

# Errors
from .errors import (
    ApiError,
    ConfigError,
    ConflictingProviderPreference,
    DecodeError,
    DuplicateToolName,
    EmptyCredential,
    IncompleteConfiguration,
    InvalidBaseUrl,
    InvalidEndpointPath,
    InvalidRequest,
    InvalidToolSchema,
    OpenRouterError,
    RequestTimeout,
    RequiredPropertyMissing,
    TransportError,
    ValidationError,
)

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Search
from .search import WebSearchRequest, WebSearchResponse, WebSearchResult

# Tools
from .tools import Tool, ToolEngine, ToolRegistry

# Transport
from .transport import (
    Dispatcher,
    HttpExecutor,
    HttpxExecutor,
    JsonCodec,
    RawResponse,
)

__all__ = [
    # Chat
    "DEFAULT_MODEL",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Choice",
    "FunctionTool",
    "JsonSchemaDefinition",
    "Message",
    "ProviderPreferences",
    "RequestBuilder",
    "Role",
    "StructuredOutputSpec",
    "ToolCall",
    "ToolDescriptor",
    "Usage",
    "build_request",
    "completion_request",
    # Client
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "NoAuthClient",
    "OpenRouterClient",
    "OpenRouterConfig",
    "ReadyClient",
    "create_client",
    # Errors
    "ApiError",
    "ConfigError",
    "ConflictingProviderPreference",
    "DecodeError",
    "DuplicateToolName",
    "EmptyCredential",
    "IncompleteConfiguration",
    "InvalidBaseUrl",
    "InvalidEndpointPath",
    "InvalidRequest",
    "InvalidToolSchema",
    "OpenRouterError",
    "RequestTimeout",
    "RequiredPropertyMissing",
    "TransportError",
    "ValidationError",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Search
    "WebSearchRequest",
    "WebSearchResponse",
    "WebSearchResult",
    # Tools
    "Tool",
    "ToolEngine",
    "ToolRegistry",
    # Transport
    "Dispatcher",
    "HttpExecutor",
    "HttpxExecutor",
    "JsonCodec",
    "RawResponse",
]

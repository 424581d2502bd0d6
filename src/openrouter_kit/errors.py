# src/openrouter_kit/errors.py

"""Exception hierarchy for openrouter-kit.

Every failure the library raises is an ``OpenRouterError``. The direct
subclasses tell the caller where it happened:

- ``ConfigError``: a configuration step was given bad input.
- ``ValidationError``: a request failed assembly checks. Nothing was sent.
- ``TransportError``: the HTTP executor could not complete the exchange.
- ``ApiError``: the service answered with a non-2xx status.
- ``DecodeError``: the service answered 2xx but the body has the wrong shape.

None of these are retried by the library.
"""

from typing import Any

PREVIEW_CHARS = 200


class OpenRouterError(Exception):
    """Base class for all openrouter-kit errors."""


# ============================================================================
# Configuration
# ============================================================================


class ConfigError(OpenRouterError, ValueError):
    """Raised synchronously by the configuration step that caused it."""


class InvalidBaseUrl(ConfigError):
    pass


class InvalidEndpointPath(ConfigError):
    pass


class EmptyCredential(ConfigError):
    pass


class IncompleteConfiguration(ConfigError):
    """A ready-stage client was built from a config missing url or key."""


# ============================================================================
# Request validation
# ============================================================================


class ValidationError(OpenRouterError, ValueError):
    """Raised by the request assembler before any network call."""


class InvalidRequest(ValidationError):
    pass


class DuplicateToolName(ValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Tool '{name}' already registered")
        self.name = name


class InvalidToolSchema(ValidationError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid parameters schema for tool '{name}': {reason}")
        self.name = name
        self.reason = reason


class RequiredPropertyMissing(ValidationError):
    def __init__(self, schema_name: str, missing: list[str]) -> None:
        super().__init__(
            f"Strict schema '{schema_name}' requires undefined properties: "
            + ", ".join(missing)
        )
        self.schema_name = schema_name
        self.missing = missing


class ConflictingProviderPreference(ValidationError):
    def __init__(self, providers: list[str]) -> None:
        super().__init__(
            "Providers listed in both 'order' and 'ignore': " + ", ".join(providers)
        )
        self.providers = providers


# ============================================================================
# Dispatch
# ============================================================================


class TransportError(OpenRouterError):
    """Connection, TLS or protocol failure reported by the HTTP executor."""


class RequestTimeout(TransportError):
    pass


class ApiError(OpenRouterError):
    """Non-2xx response from the service."""

    def __init__(
        self,
        status_code: int,
        message: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.metadata = metadata


class DecodeError(OpenRouterError):
    """Response body does not match the expected shape."""

    def __init__(self, message: str, body: bytes | str = b"") -> None:
        self.body_size = len(body)
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        self.preview = body[:PREVIEW_CHARS]
        super().__init__(
            f"{message} (body size={self.body_size}, preview={self.preview!r})"
        )
        self.message = message

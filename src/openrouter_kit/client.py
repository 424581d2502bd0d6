# src/openrouter_kit/client.py

"""Staged client construction.

A client is built in a fixed order, one class per stage::

    OpenRouterClient --with_base_url--> NoAuthClient --with_api_key--> ReadyClient

Only ``ReadyClient`` has request-issuing methods. The earlier stages simply
do not define them, so a skipped step shows up as an ``AttributeError`` (and
as a type error under mypy/pyright) instead of a half-configured request.

Python cannot stop anyone from calling ``ReadyClient(...)`` directly, so its
constructor re-checks the config. That is the single runtime check.

Example:
    >>> client = (
    ...     OpenRouterClient()
    ...     .with_base_url("https://openrouter.ai/api/v1/")
    ...     .with_site_title("My App")
    ...     .with_api_key("sk-...")
    ... )
    >>> response = await client.chat_completion(
    ...     client.completion_request([Message(role=Role.USER, content="Hi")])
    ... )
"""

import logging
from collections.abc import Sequence
from dataclasses import replace
from types import TracebackType
from typing import Any

from openrouter_kit.chat.assembler import DEFAULT_MODEL, RequestBuilder
from openrouter_kit.chat.base import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Message,
)
from openrouter_kit.errors import (
    ConfigError,
    EmptyCredential,
    IncompleteConfiguration,
)
from openrouter_kit.observability.base import MetricsHook, NoOpMetricsHook
from openrouter_kit.search.base import WebSearchResponse, build_search_request
from openrouter_kit.transport.base import HttpExecutor
from openrouter_kit.transport.dispatcher import Dispatcher
from openrouter_kit.transport.httpx_executor import HttpxExecutor

from .config import ClientConfig, validate_base_url

logger = logging.getLogger(__name__)


def _set_once(config: ClientConfig, field: str, value: Any) -> ClientConfig:
    if getattr(config, field) is not None:
        raise ConfigError(f"'{field}' is already set")
    return replace(config, **{field: value})


class OpenRouterClient:
    """Unconfigured stage. The only way forward is ``with_base_url``."""

    def __init__(
        self,
        *,
        executor: HttpExecutor | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._executor = executor
        self._metrics_hook = metrics_hook

    def with_base_url(self, base_url: str) -> "NoAuthClient":
        """Set the base URL. It must be absolute and end with ``/``.

        Raises:
            InvalidBaseUrl: If the URL is malformed or lacks the slash.
        """
        config = ClientConfig(base_url=validate_base_url(base_url))
        return NoAuthClient(
            config, executor=self._executor, metrics_hook=self._metrics_hook
        )


class NoAuthClient:
    """Base URL is known, credentials are not.

    Every setting may be given at most once. ``timeout`` and ``max_retries``
    have defaults, so the fields set here are tracked in ``tuned``.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        executor: HttpExecutor | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        tuned: frozenset[str] = frozenset(),
    ) -> None:
        if not config.base_url:
            raise IncompleteConfiguration("NoAuthClient requires a base_url")
        self._config = config
        self._executor = executor
        self._metrics_hook = metrics_hook
        self._tuned = tuned

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _next(self, config: ClientConfig, tuned: str | None = None) -> "NoAuthClient":
        return NoAuthClient(
            config,
            executor=self._executor,
            metrics_hook=self._metrics_hook,
            tuned=self._tuned if tuned is None else self._tuned | {tuned},
        )

    def _tune(self, field: str, value: Any) -> "NoAuthClient":
        if field in self._tuned:
            raise ConfigError(f"'{field}' is already set")
        return self._next(replace(self._config, **{field: value}), tuned=field)

    def with_http_referer(self, referer: str) -> "NoAuthClient":
        return self._next(_set_once(self._config, "http_referer", referer))

    def with_site_title(self, title: str) -> "NoAuthClient":
        return self._next(_set_once(self._config, "site_title", title))

    def with_timeout(self, timeout: float) -> "NoAuthClient":
        if timeout <= 0:
            raise ConfigError(f"Timeout must be positive, got {timeout}")
        return self._tune("timeout", timeout)

    def with_max_retries(self, max_retries: int) -> "NoAuthClient":
        if max_retries < 1:
            raise ConfigError(f"max_retries must be at least 1, got {max_retries}")
        return self._tune("max_retries", max_retries)

    def with_api_key(self, api_key: str) -> "ReadyClient":
        """Supply the API key and reach the ready stage.

        Raises:
            EmptyCredential: If the key is empty or whitespace only.
        """
        if not api_key or not api_key.strip():
            raise EmptyCredential("API key must not be empty")
        return ReadyClient(
            replace(self._config, api_key=api_key.strip()),
            executor=self._executor,
            metrics_hook=self._metrics_hook,
        )


class ReadyClient:
    """Fully configured client. Immutable; share it across tasks.

    Owns the HTTP executor only when it created one itself. Close it with
    ``aclose()`` or ``async with``.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        executor: HttpExecutor | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if not config.is_complete:
            raise IncompleteConfiguration(
                "ReadyClient requires both base_url and api_key; build it with "
                "OpenRouterClient().with_base_url(...).with_api_key(...)"
            )
        self._config = config
        self._owns_executor = executor is None
        self._executor = executor or HttpxExecutor(
            timeout=config.timeout, max_retries=config.max_retries
        )
        self.metrics_hook = metrics_hook
        self._dispatcher = Dispatcher(
            config, self._executor, metrics_hook=metrics_hook
        )
        logger.info(
            "Initialized ReadyClient with base_url=%s, timeout=%s",
            config.base_url,
            config.timeout,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _with_config(self, config: ClientConfig) -> "ReadyClient":
        # The new client borrows the executor; closing stays with this one.
        return ReadyClient(
            config, executor=self._executor, metrics_hook=self.metrics_hook
        )

    def with_http_referer(self, referer: str) -> "ReadyClient":
        return self._with_config(_set_once(self._config, "http_referer", referer))

    def with_site_title(self, title: str) -> "ReadyClient":
        return self._with_config(_set_once(self._config, "site_title", title))

    def completion_request(
        self, messages: Sequence[Message], model: str = DEFAULT_MODEL
    ) -> RequestBuilder:
        """Start a fluent request. Nothing is validated until ``build()``."""
        return RequestBuilder(messages=tuple(messages), model=model)

    async def chat_completion(
        self, request: ChatCompletionRequest | RequestBuilder
    ) -> ChatCompletionResponse:
        """Send a chat completion.

        Args:
            request: An assembled request, or a builder that is built first.

        Raises:
            ValidationError: The builder failed assembly. Nothing was sent.
            TransportError: The executor could not reach the service.
            ApiError: The service answered with a non-2xx status.
            DecodeError: The body or a tool call has the wrong shape.
        """
        if isinstance(request, RequestBuilder):
            request = request.build()
        return await self._dispatcher.chat_completion(request)

    async def web_search(
        self, query: str, num_results: int | None = None
    ) -> WebSearchResponse:
        """Run a web search. Same error classes as ``chat_completion``."""
        return await self._dispatcher.web_search(
            build_search_request(query, num_results)
        )

    async def aclose(self) -> None:
        if self._owns_executor:
            await self._executor.aclose()

    async def __aenter__(self) -> "ReadyClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

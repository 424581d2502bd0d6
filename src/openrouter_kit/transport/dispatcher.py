# src/openrouter_kit/transport/dispatcher.py

"""Request dispatch: payload in, typed response or classified error out.

Failure classes never blur into each other:

- executor failures surface as ``TransportError`` exactly as raised,
- non-2xx statuses become ``ApiError`` with the service's own message,
- 2xx bodies of the wrong shape become ``DecodeError``.
"""

import logging
from time import monotonic
from typing import Any, TypeVar, cast

import pydantic
from pydantic import BaseModel, ConfigDict

from openrouter_kit.chat.base import ChatCompletionRequest, ChatCompletionResponse
from openrouter_kit.config import ClientConfig, join_url
from openrouter_kit.errors import ApiError, IncompleteConfiguration, OpenRouterError
from openrouter_kit.observability import names
from openrouter_kit.observability.base import MetricsHook, NoOpMetricsHook
from openrouter_kit.search.base import WebSearchRequest, WebSearchResponse

from .base import HttpExecutor, RawResponse
from .codec import JsonCodec

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

CHAT_COMPLETIONS_PATH = "chat/completions"
WEB_SEARCH_PATH = "web/search"


class _ErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: int | str | None = None
    message: str
    metadata: dict[str, Any] | None = None


class _ErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    error: _ErrorDetail


class Dispatcher:
    """Performs network calls for a fully configured client.

    Never mutates ``config``; one dispatcher may serve any number of
    concurrent requests.
    """

    def __init__(
        self,
        config: ClientConfig,
        executor: HttpExecutor,
        codec: JsonCodec | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        if not config.is_complete:
            raise IncompleteConfiguration(
                "Dispatcher requires a config with base_url and api_key"
            )
        self._config = config
        self._base_url = cast(str, config.base_url)
        self._executor = executor
        self._codec = codec or JsonCodec()
        self.metrics_hook = metrics_hook

    async def dispatch(
        self, path: str, payload: BaseModel, response_type: type[T]
    ) -> T:
        """POST ``payload`` to ``path`` and decode the body as ``response_type``.

        Raises:
            ConfigError: ``path`` cannot be joined to the base URL.
            TransportError: Propagated from the executor.
            ApiError: Non-2xx status.
            DecodeError: Empty or malformed body.
        """
        url = join_url(self._base_url, path)
        body = self._codec.encode(payload)
        start = monotonic()

        logger.debug("POST %s: %d bytes", url, len(body))
        try:
            raw = await self._executor.send(
                "POST",
                url,
                self._config.build_headers(),
                body,
                timeout=self._config.timeout,
            )
            self.metrics_hook.increment(
                names.REQUESTS_TOTAL,
                labels={"endpoint": path, "status": str(raw.status)},
            )
            if not raw.is_success:
                raise _api_error(raw)
            result = self._codec.decode(raw.body, response_type)
        except OpenRouterError as exc:
            self.metrics_hook.increment(
                names.ERRORS_TOTAL,
                labels={"endpoint": path, "error": type(exc).__name__},
            )
            logger.warning("POST %s failed: %s", url, exc)
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.REQUEST_DURATION, elapsed_ms, labels={"endpoint": path}
        )
        logger.debug("POST %s: status=%d, latency=%.0fms", url, raw.status, elapsed_ms)
        return result

    async def chat_completion(
        self, request: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        response = await self.dispatch(
            CHAT_COMPLETIONS_PATH, request, ChatCompletionResponse
        )
        try:
            validate_tool_calls(response)
        except OpenRouterError as exc:
            self.metrics_hook.increment(
                names.ERRORS_TOTAL,
                labels={"endpoint": CHAT_COMPLETIONS_PATH, "error": type(exc).__name__},
            )
            raise

        self.metrics_hook.increment(names.TOKENS_PROMPT, response.usage.prompt_tokens)
        self.metrics_hook.increment(
            names.TOKENS_COMPLETION, response.usage.completion_tokens
        )
        self.metrics_hook.increment(names.TOKENS_TOTAL, response.usage.total_tokens)
        logger.info(
            "Chat completion: model=%s, finish=%s, tokens=%d",
            response.model,
            response.choices[0].finish_reason if response.choices else None,
            response.usage.total_tokens,
        )
        return response

    async def web_search(self, request: WebSearchRequest) -> WebSearchResponse:
        response = await self.dispatch(WEB_SEARCH_PATH, request, WebSearchResponse)
        logger.info(
            "Web search: query=%r, results=%d", response.query, len(response.results)
        )
        return response


def validate_tool_calls(response: ChatCompletionResponse) -> None:
    """Check every tool call in every choice carries JSON-object arguments.

    All-or-nothing: one malformed call fails the whole response.

    Raises:
        DecodeError: On the first malformed call.
    """
    for choice in response.choices:
        for tool_call in choice.message.tool_calls or []:
            tool_call.parsed_arguments()


def _api_error(raw: RawResponse) -> ApiError:
    try:
        detail = _ErrorBody.model_validate_json(raw.body).error
    except pydantic.ValidationError:
        message = raw.text.strip() or f"HTTP {raw.status}"
        return ApiError(raw.status, message)
    return ApiError(raw.status, detail.message, detail.metadata)

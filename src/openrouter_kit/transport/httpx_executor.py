# src/openrouter_kit/transport/httpx_executor.py

import logging
from collections.abc import Mapping

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from openrouter_kit.errors import RequestTimeout, TransportError

from .base import HttpExecutor, RawResponse

logger = logging.getLogger(__name__)


class HttpxExecutor(HttpExecutor):
    """HTTP executor on top of ``httpx.AsyncClient``.

    Retries connection-level failures only. Any HTTP status, including 429
    and 5xx, is returned to the caller untouched.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 3,
        client: httpx.AsyncClient | None = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        logger.info(
            "Initialized HttpxExecutor with timeout=%s, max_retries=%s",
            timeout,
            max_retries,
        )

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> RawResponse:
        try:
            response = await self._send_with_retries(
                method=method,
                url=url,
                headers=headers,
                body=body,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeout(f"{method} {url} timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        return RawResponse(
            status=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    async def _send_with_retries(
        self,
        *,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> httpx.Response:
        """Send with transport-only retries."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.request(
                    method,
                    url,
                    headers=dict(headers),
                    content=body,
                    timeout=timeout,
                )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

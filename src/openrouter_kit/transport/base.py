# src/openrouter_kit/transport/base.py

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class RawResponse:
    """Undecoded HTTP response handed back by an executor."""

    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpExecutor(Protocol):
    """Protocol for the component that moves bytes over the network.

    Design principles:
    - Owns connections: pooling, reuse and TLS live here, nowhere else
    - Transport only: may retry connection-level failures, never statuses
    - Any status is a valid result: non-2xx responses are returned, not raised
    - Cancellation follows asyncio: a cancelled ``send`` propagates
      ``CancelledError``
    """

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> RawResponse:
        """Send one request and return the raw response.

        Raises:
            TransportError: Connection, TLS or protocol failure.
            RequestTimeout: The exchange exceeded ``timeout`` seconds.
        """
        ...

    async def aclose(self) -> None:
        """Release pooled connections."""
        ...

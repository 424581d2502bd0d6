import copy
import json
from collections.abc import Callable, Mapping
from typing import Any

import pytest

from openrouter_kit.transport.base import RawResponse

CHAT_RESPONSE: dict[str, Any] = {
    "id": "gen-123",
    "object": "chat.completion",
    "created": 1735689600,
    "model": "openai/gpt-4",
    "provider": "OpenAI",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hello from the stub!"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
}


class StubExecutor:
    """In-process executor that replays canned responses in order.

    Dicts are sent back as 200 JSON bodies, exceptions are raised.
    """

    def __init__(self, *responses: RawResponse | dict | Exception) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> RawResponse:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(headers),
                "body": body,
                "timeout": timeout,
            }
        )
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return RawResponse(status=200, body=json.dumps(response).encode())
        return response

    async def aclose(self) -> None:
        self.closed = True

    def sent_json(self, index: int = -1) -> Any:
        return json.loads(self.calls[index]["body"])


@pytest.fixture
def stub_executor() -> Callable[..., StubExecutor]:
    return StubExecutor


@pytest.fixture
def chat_response() -> dict[str, Any]:
    return copy.deepcopy(CHAT_RESPONSE)

from .base import HttpExecutor, RawResponse
from .codec import JsonCodec
from .dispatcher import CHAT_COMPLETIONS_PATH, WEB_SEARCH_PATH, Dispatcher
from .httpx_executor import HttpxExecutor

__all__ = [
    "CHAT_COMPLETIONS_PATH",
    "WEB_SEARCH_PATH",
    "Dispatcher",
    "HttpExecutor",
    "HttpxExecutor",
    "JsonCodec",
    "RawResponse",
]

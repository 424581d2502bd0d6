from .base import (
    MAX_SEARCH_RESULTS,
    WebSearchRequest,
    WebSearchResponse,
    WebSearchResult,
    build_search_request,
)

__all__ = [
    "MAX_SEARCH_RESULTS",
    "WebSearchRequest",
    "WebSearchResponse",
    "WebSearchResult",
    "build_search_request",
]

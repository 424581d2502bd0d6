# src/openrouter_kit/search/base.py

from pydantic import BaseModel, ConfigDict

from openrouter_kit.errors import InvalidRequest

MAX_SEARCH_RESULTS = 10


class WebSearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    query: str
    num_results: int | None = None


class WebSearchResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str
    url: str
    snippet: str | None = None


class WebSearchResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    query: str
    results: list[WebSearchResult]


def build_search_request(
    query: str, num_results: int | None = None
) -> WebSearchRequest:
    """Validate a web search before it is sent.

    Raises:
        InvalidRequest: Empty query, or ``num_results`` outside
            ``1..MAX_SEARCH_RESULTS``.
    """
    if not query or not query.strip():
        raise InvalidRequest("Search query must not be empty")
    if num_results is not None and not 1 <= num_results <= MAX_SEARCH_RESULTS:
        raise InvalidRequest(
            f"num_results must be within [1, {MAX_SEARCH_RESULTS}], got {num_results}"
        )
    return WebSearchRequest(query=query, num_results=num_results)

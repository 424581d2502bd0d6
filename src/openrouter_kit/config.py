# src/openrouter_kit/config.py

import re
from dataclasses import dataclass, field

import httpx

from openrouter_kit.errors import InvalidBaseUrl, InvalidEndpointPath

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1/"

# RFC 3986 scheme prefix; a path starting with one resolves to itself.
_SCHEME_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings carried from stage to stage.

    Immutable. Each configuration step returns a new instance.
    """

    base_url: str | None = None
    api_key: str | None = field(default=None, repr=False)
    http_referer: str | None = None
    site_title: str | None = None
    timeout: float = 30.0
    max_retries: int = 3

    @property
    def is_complete(self) -> bool:
        return bool(self.base_url) and bool(self.api_key)

    def build_headers(self) -> dict[str, str]:
        """Build HTTP headers required for making API calls."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if self.http_referer:
            headers["HTTP-Referer"] = self.http_referer
        if self.site_title:
            headers["X-Title"] = self.site_title
        return headers


def validate_base_url(url: str) -> str:
    """Check ``url`` is an absolute http(s) URL ending with ``/``.

    The trailing slash is required, not added: relative endpoint paths are
    resolved against the base, and without it the last path segment would
    be replaced.

    Returns:
        The URL as normalized by httpx.

    Raises:
        InvalidBaseUrl: If any of the checks fail.
    """
    if not url or not url.strip():
        raise InvalidBaseUrl("Base URL must not be empty")
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidBaseUrl(f"Invalid base URL {url!r}: {exc}") from exc

    if parsed.scheme not in ("http", "https"):
        raise InvalidBaseUrl(f"Base URL must use http or https: {url!r}")
    if not parsed.host:
        raise InvalidBaseUrl(f"Base URL has no host: {url!r}")
    if parsed.query or parsed.fragment:
        raise InvalidBaseUrl(
            f"Base URL must not carry a query or fragment: {url!r}"
        )
    if not url.endswith("/") or not parsed.path.endswith("/"):
        raise InvalidBaseUrl(f"Base URL must end with '/': {url!r}")
    return str(parsed)


def join_url(base_url: str, path: str) -> str:
    """Resolve an endpoint path against the base URL.

    >>> join_url("https://host/api/v1/", "chat/completions")
    'https://host/api/v1/chat/completions'
    """
    if not base_url.endswith("/"):
        raise InvalidBaseUrl(f"Base URL must end with '/': {base_url!r}")
    if not path or path.startswith("/") or "://" in path:
        raise InvalidEndpointPath(
            f"Endpoint path must be relative without a leading '/': {path!r}"
        )
    if _SCHEME_PREFIX.match(path):
        raise InvalidEndpointPath(f"Endpoint path must not carry a scheme: {path!r}")
    if ".." in path.split("?", 1)[0].split("/"):
        raise InvalidEndpointPath(
            f"Endpoint path must not climb above the base: {path!r}"
        )
    return str(httpx.URL(base_url).join(path))

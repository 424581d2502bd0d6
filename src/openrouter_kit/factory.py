# src/openrouter_kit/factory.py

from dataclasses import dataclass, field

from openrouter_kit.observability.base import MetricsHook, NoOpMetricsHook
from openrouter_kit.transport.base import HttpExecutor

from .client import OpenRouterClient, ReadyClient
from .config import DEFAULT_BASE_URL


@dataclass(frozen=True)
class OpenRouterConfig:
    """Declarative client settings.

    Immutable. Explicit. No magic defaults from environment.
    """

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    http_referer: str | None = None
    site_title: str | None = None
    timeout: float = 30.0
    max_retries: int = 3


def create_client(
    config: OpenRouterConfig,
    executor: HttpExecutor | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ReadyClient:
    """Create a ready client from config.

    Walks the same stages a caller would, so every stage check applies.

    Args:
        config: Client settings.
        executor: Optional HTTP executor. Defaults to an ``HttpxExecutor``
            owned by the returned client.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        Configured ``ReadyClient``.

    Raises:
        ConfigError: If the base URL, API key or limits are invalid.

    Example:
        >>> config = OpenRouterConfig(api_key="sk-...", site_title="My App")
        >>> async with create_client(config) as client:
        ...     response = await client.web_search("python asyncio")
    """
    stage = (
        OpenRouterClient(executor=executor, metrics_hook=metrics_hook)
        .with_base_url(config.base_url)
        .with_timeout(config.timeout)
        .with_max_retries(config.max_retries)
    )
    if config.http_referer is not None:
        stage = stage.with_http_referer(config.http_referer)
    if config.site_title is not None:
        stage = stage.with_site_title(config.site_title)
    return stage.with_api_key(config.api_key)

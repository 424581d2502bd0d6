# src/openrouter_kit/observability/base.py

import logging
from typing import Protocol

Labels = dict[str, str]


class MetricsHook(Protocol):
    """Sink for client metrics. Plug in Prometheus, StatsD, OTel, etc.

    Implementations must be safe to call from concurrent dispatches and must
    not raise.
    """

    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: Labels | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: Labels | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: Labels | None = None
    ) -> None:
        pass


class LoggingMetricsHook:
    """Writes every metric to a logger at DEBUG level.

    Handy during development when no metrics backend is wired up.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("openrouter_kit.metrics")

    def record_latency(
        self, name: str, value_ms: float, labels: Labels | None = None
    ) -> None:
        self._logger.debug("metric %s=%.1fms labels=%s", name, value_ms, labels or {})

    def increment(
        self, name: str, value: int = 1, labels: Labels | None = None
    ) -> None:
        self._logger.debug("metric %s+=%d labels=%s", name, value, labels or {})

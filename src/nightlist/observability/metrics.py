"""Metrics hook protocol and no-op default implementation.

nightlist emits counters, timings and gauges around reconciliation and
list submission.  By default a :class:`NoopMetricsHook` is used so there is
zero overhead.  Users can supply their own implementation that satisfies
the :class:`MetricsHook` protocol to route metrics to any backend.

Emitted metric names:

* ``nightlist.edit_ops_total``         -- counter, tagged ``op_type``
* ``nightlist.reconcile_duration_ms``  -- timing
* ``nightlist.list_size``              -- gauge, tagged ``side``
* ``nightlist.submissions_total``      -- counter
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict whose keys and values are
    strings.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that silently discards all data points.

    Used when the caller does not supply a custom :class:`MetricsHook`, so
    call-sites never need ``if self._metrics is not None`` guards.
    """

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass


def resolve_metrics(metrics: Any | None) -> Any:
    """Return *metrics*, or a :class:`NoopMetricsHook` when it is ``None``."""
    return metrics if metrics is not None else NoopMetricsHook()

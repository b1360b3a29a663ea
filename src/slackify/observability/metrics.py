"""Metrics hook protocol and its no-op default.

The converter reports what it produced through a :class:`MetricsHook`.
Without one, :class:`NoopMetricsHook` discards every data point.

Emitted metric names:

* ``slackify.blocks_created_total``      -- counter, tagged with ``type``
* ``slackify.conversion_warnings_total`` -- counter, tagged with ``code``
* ``slackify.conversion_duration_ms``    -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* are string key-value pairs; backends map them onto their own
    tagging scheme (Datadog tags, Prometheus labels, ...).
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...


class NoopMetricsHook:
    """Metrics backend that discards all data points."""

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

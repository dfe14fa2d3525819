"""Per-handler counters and latency timings.

Names are dotted (``<namespace>.<handler>.requests``) and tags use the
``key:value`` form. Sink failures are swallowed so that recording a metric can
never change a response.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
import re
import threading
from typing import Protocol

from prometheus_client import CollectorRegistry
from prometheus_client import Counter
from prometheus_client import Histogram

logger = logging.getLogger(__name__)

Tags = Sequence[str] | None

_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_:]")


class TelemetrySink(Protocol):
    """Backend receiving fully qualified metric names."""

    def incr(self, name: str, tags: Tags, value: float) -> None: ...

    def timing(self, name: str, seconds: float, tags: Tags) -> None: ...


def parse_tags(tags: Tags) -> dict[str, str]:
    """Turn ``["error_type:internal"]`` into ``{"error_type": "internal"}``."""
    labels: dict[str, str] = {}
    for tag in tags or ():
        key, _, value = tag.partition(":")
        labels[key] = value
    return labels


def prometheus_name(name: str) -> str:
    return _INVALID_NAME_CHARS.sub("_", name)


class PrometheusSink:
    """Record metrics on a private prometheus_client registry."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self._counters: dict[str, Counter] = {}
        self._histograms: dict[str, Histogram] = {}
        self._lock = threading.Lock()

    def _counter(self, name: str, label_names: Sequence[str]) -> Counter:
        with self._lock:
            counter = self._counters.get(name)
            if counter is None:
                counter = Counter(name, name, labelnames=tuple(label_names), registry=self.registry)
                self._counters[name] = counter
            return counter

    def _histogram(self, name: str, label_names: Sequence[str]) -> Histogram:
        with self._lock:
            histogram = self._histograms.get(name)
            if histogram is None:
                histogram = Histogram(name, name, labelnames=tuple(label_names), registry=self.registry)
                self._histograms[name] = histogram
            return histogram

    def incr(self, name: str, tags: Tags, value: float) -> None:
        labels = parse_tags(tags)
        counter = self._counter(prometheus_name(name), sorted(labels))
        if labels:
            counter.labels(**labels).inc(value)
        else:
            counter.inc(value)

    def timing(self, name: str, seconds: float, tags: Tags) -> None:
        labels = parse_tags(tags)
        histogram = self._histogram(prometheus_name(name), sorted(labels))
        if labels:
            histogram.labels(**labels).observe(seconds)
        else:
            histogram.observe(seconds)


class Telemetry:
    """Namespaced metric recorder shared by every admin handler."""

    def __init__(self, sink: TelemetrySink | None = None, *, namespace: str = "admin_gateway.admin") -> None:
        self.sink = sink if sink is not None else PrometheusSink()
        self.namespace = namespace

    def qualify(self, name: str) -> str:
        if not self.namespace:
            return name
        return f"{self.namespace}.{name}"

    def incr(self, name: str, tags: Tags = None, value: float = 1) -> None:
        try:
            self.sink.incr(self.qualify(name), tags, value)
        except Exception:  # noqa: BLE001
            logger.debug("telemetry counter %s could not be recorded", name, exc_info=True)

    def timing(self, name: str, seconds: float, tags: Tags = None) -> None:
        try:
            self.sink.timing(self.qualify(name), seconds, tags)
        except Exception:  # noqa: BLE001
            logger.debug("telemetry timing %s could not be recorded", name, exc_info=True)

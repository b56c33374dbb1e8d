from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class DecisionLogSink(Protocol):
    """Receives one payload per completed decision."""

    def log(self, payload: Dict[str, Any]) -> None: ...


@runtime_checkable
class MetricsSink(Protocol):
    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None: ...

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None: ...


__all__ = ["DecisionLogSink", "MetricsSink"]

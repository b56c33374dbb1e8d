from __future__ import annotations

from typing import Any, Dict, Optional

from policykit.core.ports import MetricsSink

try:
    from opentelemetry.metrics import get_meter  # type: ignore
except Exception:  # pragma: no cover
    get_meter = None  # type: ignore


class OpenTelemetryMetrics(MetricsSink):
    """OpenTelemetry-based MetricsSink.

    Creates:
      - Counter: policykit_decisions_total (attributes: decision)
      - Histogram: policykit_decision_seconds (unit: s)
    """

    _counter: Optional[Any]
    _hist: Optional[Any]

    def __init__(self) -> None:
        self._counter = None
        self._hist = None

        if get_meter is None:  # pragma: no cover
            return

        meter = get_meter("policykit.metrics")
        try:
            self._counter = meter.create_counter(  # type: ignore[attr-defined]
                name="policykit_decisions_total",
                description="Total policykit decisions by outcome.",
            )
        except Exception:  # pragma: no cover
            self._counter = None

        try:
            create_hist = getattr(meter, "create_histogram", None)
            if create_hist is not None:
                self._hist = create_hist(  # type: ignore[misc]
                    name="policykit_decision_seconds",
                    description="policykit decision evaluation duration in seconds.",
                    unit="s",
                )
        except Exception:  # pragma: no cover
            self._hist = None

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        if self._counter is None:  # pragma: no cover
            return
        decision = (labels or {}).get("decision", "unknown")
        try:
            self._counter.add(1, {"decision": decision})  # type: ignore[attr-defined]
        except Exception:  # pragma: no cover
            pass

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None:
        if self._hist is None:
            return
        try:
            self._hist.record(float(value), dict(labels or {}))  # type: ignore[attr-defined]
        except Exception:  # pragma: no cover
            pass

import builtins
import importlib
import sys
import types

import pytest


def _purge(modname: str) -> None:
    for k in list(sys.modules):
        if k == modname or k.startswith(modname + "."):
            sys.modules.pop(k, None)


class _Counter:
    def __init__(self, *a, **k):
        self.args = a
        self.kwargs = k
        self.calls = []

    class _Child:
        def __init__(self, parent, labels):
            self.parent = parent
            self.labels = labels

        def inc(self, *a, **k):
            self.parent.calls.append(("inc", dict(self.labels)))

    def labels(self, **labels):
        return self._Child(self, labels)


class _Histogram:
    def __init__(self, *a, **k):
        self.kwargs = k
        self.values = []

    def observe(self, v):
        self.values.append(float(v))


@pytest.fixture
def fake_prom(monkeypatch):
    fake = types.ModuleType("prometheus_client")
    fake.Counter = _Counter
    fake.Histogram = _Histogram
    monkeypatch.setitem(sys.modules, "prometheus_client", fake)
    _purge("policykit.metrics.prometheus")
    import policykit.metrics.prometheus as prom

    yield prom
    _purge("policykit.metrics.prometheus")


def test_prometheus_inc_and_observe(fake_prom):
    m = fake_prom.PrometheusMetrics()
    m.inc("policykit_decisions_total", {"decision": "allow"})
    m.inc("ignored_name")
    assert m._counter.calls == [("inc", {"decision": "allow"}), ("inc", {"decision": "unknown"})]
    assert m._counter.args[0] == "policykit_decisions_total"
    m.observe("policykit_decision_seconds", 0.5, {"decision": "allow"})
    assert m._hist.values == [0.5]


def test_prometheus_registry_is_forwarded(fake_prom):
    registry = object()
    m = fake_prom.PrometheusMetrics(registry=registry)
    assert m._counter.kwargs["registry"] is registry
    assert m._hist.kwargs["registry"] is registry


def test_prometheus_with_engine(fake_prom):
    from policykit.core.engine import use_permission

    m = fake_prom.PrometheusMetrics()
    perms = use_permission({"read": lambda u, r: r}, for_user={"id": 1}, metrics=m)
    perms.allows("read", True)
    perms.allows("read", False)
    assert m._counter.calls == [("inc", {"decision": "allow"}), ("inc", {"decision": "deny"})]
    assert len(m._hist.values) == 2


def test_prometheus_without_client(monkeypatch):
    _purge("policykit.metrics.prometheus")
    real_import = builtins.__import__

    def fake_import(name, *a, **k):
        if name == "prometheus_client":
            raise ImportError("not installed")
        return real_import(name, *a, **k)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    import policykit.metrics.prometheus as prom

    importlib.reload(prom)
    m = prom.PrometheusMetrics()
    assert m._counter is None and m._hist is None
    m.inc("policykit_decisions_total", {"decision": "allow"})
    m.observe("policykit_decision_seconds", 0.1)
    monkeypatch.undo()
    _purge("policykit.metrics.prometheus")


def test_prometheus_real_client_with_private_registry():
    prometheus_client = pytest.importorskip("prometheus_client")
    _purge("policykit.metrics.prometheus")
    import policykit.metrics.prometheus as prom

    registry = prometheus_client.CollectorRegistry()
    m = prom.PrometheusMetrics(registry=registry)
    m.inc("policykit_decisions_total", {"decision": "deny"})
    m.observe("policykit_decision_seconds", 0.25)
    assert registry.get_sample_value("policykit_decisions_total", {"decision": "deny"}) == 1.0
    assert registry.get_sample_value("policykit_decision_seconds_count") == 1.0

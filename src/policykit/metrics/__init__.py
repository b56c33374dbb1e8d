"""Metrics sinks. Import the concrete backend module you need:

- ``policykit.metrics.prometheus.PrometheusMetrics``
- ``policykit.metrics.otel.OpenTelemetryMetrics``
"""

"""Prometheus metrics for the relay.

Metrics Defined:
- hookrelay_webhooks_received_total: Counter of webhooks by event and result
- hookrelay_deliveries_total: Counter of Discord deliveries by event and result
- hookrelay_delivery_duration_seconds: Histogram of Discord call latency

Metrics are exposed at the `/metrics` endpoint in Prometheus format.
"""

import logging
from typing import Optional

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


logger = logging.getLogger(__name__)


# Discord usually answers well under a second; the upper buckets cover
# requests that run into the delivery timeout.
DEFAULT_DURATION_BUCKETS = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


class RelayMetrics:
    """Container for the relay's Prometheus metrics.

    Supports custom registries so tests do not collide on the global one.

    Metrics:
        webhooks_received_total: Counter of inbound webhooks.
            Labels: event (push/pull_request/ignored), result
            (relayed/ignored/no_commits/unauthorized/invalid/failed)

        deliveries_total: Counter of Discord delivery attempts.
            Labels: event, result (success/failure)

        delivery_duration_seconds: Histogram of successful Discord calls.
            Labels: event
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or REGISTRY

        self.webhooks_received_total = Counter(
            "hookrelay_webhooks_received_total",
            "Total number of GitHub webhooks received",
            labelnames=["event", "result"],
            registry=self.registry,
        )

        self.deliveries_total = Counter(
            "hookrelay_deliveries_total",
            "Total number of Discord webhook delivery attempts",
            labelnames=["event", "result"],
            registry=self.registry,
        )

        self.delivery_duration_seconds = Histogram(
            "hookrelay_delivery_duration_seconds",
            "Time spent delivering messages to Discord in seconds",
            labelnames=["event"],
            buckets=DEFAULT_DURATION_BUCKETS,
            registry=self.registry,
        )

    def record_webhook(self, event: str, result: str) -> None:
        self.webhooks_received_total.labels(event=event, result=result).inc()

    def record_delivery(
        self,
        event: str,
        success: bool,
        duration_seconds: Optional[float] = None,
    ) -> None:
        """Record one Discord delivery attempt.

        Args:
            event: The event kind that produced the message.
            success: Whether Discord accepted the message.
            duration_seconds: Call latency, recorded for successful calls.
        """
        result = "success" if success else "failure"
        self.deliveries_total.labels(event=event, result=result).inc()
        if duration_seconds is not None:
            self.delivery_duration_seconds.labels(event=event).observe(duration_seconds)

    def generate_latest(self) -> bytes:
        """Render the registry in Prometheus text exposition format."""
        return generate_latest(self.registry)

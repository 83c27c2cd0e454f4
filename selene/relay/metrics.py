from __future__ import annotations

from typing import Optional

import prometheus_client
from prometheus_client import CollectorRegistry, Counter, GCCollector, PlatformCollector, ProcessCollector


class RelayMetrics:
    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        if registry is None:
            registry = CollectorRegistry()
            ProcessCollector(registry=registry)
            PlatformCollector(registry=registry)
            GCCollector(registry=registry)
        self.registry = registry
        self.transactions_received = Counter(
            "selene_webhook_transactions_total",
            "Enhanced transactions received on the webhook endpoint",
            registry=registry,
        )
        self.notifications = Counter(
            "selene_notifications_total",
            "Chat notifications by outcome",
            ["outcome"],
            registry=registry,
        )
        self.name_lookups = Counter(
            "selene_name_lookups_total",
            "Account name lookups sent to Helius by outcome",
            ["outcome"],
            registry=registry,
        )

    def exposition(self) -> bytes:
        return prometheus_client.generate_latest(self.registry)

    content_type = prometheus_client.CONTENT_TYPE_LATEST


__all__ = ["RelayMetrics"]

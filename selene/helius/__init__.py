from selene.helius.provider import HeliusClient, HeliusSettings
from selene.helius.request_factory import Cluster, HeliusRequestFactory

__all__ = [
    "Cluster",
    "HeliusClient",
    "HeliusRequestFactory",
    "HeliusSettings",
]

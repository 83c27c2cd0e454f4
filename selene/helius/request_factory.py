from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from selene.core.request_spec import RequestSpec, RpcRequest


class Cluster(str, Enum):
    MAINNET_BETA = "mainnet-beta"
    DEVNET = "devnet"


RPC_URLS = {
    Cluster.MAINNET_BETA: "https://mainnet.helius-rpc.com",
    Cluster.DEVNET: "https://devnet.helius-rpc.com",
}

API_URLS_V0 = {
    Cluster.MAINNET_BETA: "https://api-mainnet.helius-rpc.com/v0",
    Cluster.DEVNET: "https://api-devnet.helius-rpc.com/v0",
}

WEBHOOK_BASE = "webhooks"


class HeliusRequestFactory:
    """Builds request specs for the Helius endpoints.

    Every request carries the API key as the ``api-key`` query parameter.
    """

    def __init__(
        self,
        api_key: str,
        cluster: Cluster = Cluster.MAINNET_BETA,
        rpc_url: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.cluster = Cluster(cluster)
        self.rpc_url = (rpc_url or RPC_URLS[self.cluster]).rstrip("/")
        self.api_url = (api_url or API_URLS_V0[self.cluster]).rstrip("/")

    def _auth_query(self) -> Dict[str, Any]:
        return {"api-key": self.api_key}

    def build_rpc_request(self, method: str, params: Any) -> RequestSpec:
        return RequestSpec(
            method="POST",
            base_url=self.rpc_url,
            path="/",
            query=self._auth_query(),
            headers={"Content-Type": "application/json"},
            json=RpcRequest.new(method, params),
        )

    def build_api_request(self, method: str, path: str, body: Any = None) -> RequestSpec:
        return RequestSpec(
            method=method,
            base_url=self.api_url,
            path=path,
            query=self._auth_query(),
            headers={"Content-Type": "application/json"} if body is not None else {},
            json=body,
        )

    def build_parse_transactions_request(self, body: Any) -> RequestSpec:
        return self.build_api_request("POST", "/transactions", body)

    def build_transaction_history_request(self, address: str) -> RequestSpec:
        return self.build_api_request("GET", f"/addresses/{address}/transactions")

    def build_names_request(self, address: str) -> RequestSpec:
        return self.build_api_request("GET", f"/addresses/{address}/names")

    def build_webhooks_request(self) -> RequestSpec:
        return self.build_api_request("GET", f"/{WEBHOOK_BASE}")

    def build_webhook_request(self, webhook_id: str) -> RequestSpec:
        return self.build_api_request("GET", f"/{WEBHOOK_BASE}/{webhook_id}")

    def build_webhook_create_request(self, body: Any) -> RequestSpec:
        return self.build_api_request("POST", f"/{WEBHOOK_BASE}", body)

    def build_webhook_edit_request(self, webhook_id: str, body: Any) -> RequestSpec:
        return self.build_api_request("PUT", f"/{WEBHOOK_BASE}/{webhook_id}", body)

    def build_webhook_delete_request(self, webhook_id: str) -> RequestSpec:
        return self.build_api_request("DELETE", f"/{WEBHOOK_BASE}/{webhook_id}")


__all__ = ["API_URLS_V0", "Cluster", "HeliusRequestFactory", "RPC_URLS", "RequestSpec"]

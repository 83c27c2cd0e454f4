from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from selene.config import config_section
from selene.core.dispatcher import RequestDispatcher
from selene.core.exceptions import InvalidFeeResponse, ProviderMisconfigured
from selene.core.request_spec import RpcResponse
from selene.helius.das_schemas import (
    AssetProofBatch,
    GetAssetBatchParams,
    GetAssetParams,
    GetAssetProofBatchParams,
    GetAssetProofParams,
    GetAssetProofResponse,
    GetAssetResponse,
    GetAssetResponseList,
    GetAssetsByAuthorityParams,
    GetAssetsByCreatorParams,
    GetAssetsByGroupParams,
    GetAssetsByOwnerParams,
    GetTokenAccountsParams,
    GetTokenAccountsResponse,
    SearchAssetsParams,
)
from selene.helius.enhanced_schemas import EnhancedTransaction, ParseTransactionsRequest
from selene.helius.enums import PriorityLevel
from selene.helius.request_factory import Cluster, HeliusRequestFactory
from selene.helius.schemas import (
    AllFeeLevelsRequest,
    CreateWebhookRequest,
    EditWebhookRequest,
    FeeLevelRequest,
    GetPriorityFeeEstimateRequest,
    GetPriorityFeeEstimateResponse,
    Names,
    PriorityFeeEstimate,
    PriorityFeeLevels,
    PriorityFeeLevelsResponse,
    Webhook,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeliusSettings:
    api_key: str
    cluster: Cluster = Cluster.MAINNET_BETA
    timeout: float = 10.0
    connect_timeout: float = 5.0
    log_bodies: bool = False

    @classmethod
    def from_env(cls, config: Optional[Dict[str, Any]] = None, api_key: Optional[str] = None) -> "HeliusSettings":
        section = config_section(config or {}, "helius")
        key = (api_key or os.getenv("HELIUS_API_KEY", "")).strip()
        cluster = os.getenv("HELIUS_CLUSTER", section.get("cluster", Cluster.MAINNET_BETA.value)).strip()
        if cluster not in {c.value for c in Cluster}:
            raise ProviderMisconfigured(f"unknown Helius cluster {cluster!r}")
        log_flag = os.getenv("HELIUS_LOG_BODIES")
        if log_flag is None:
            log_bodies = bool(section.get("log_bodies", False))
        else:
            log_bodies = log_flag.strip().lower() in {"1", "true", "yes"}
        return cls(
            api_key=key,
            cluster=Cluster(cluster),
            timeout=float(section.get("timeout_sec", 10.0)),
            connect_timeout=float(section.get("connect_timeout_sec", 5.0)),
            log_bodies=log_bodies,
        )


class HeliusClient:
    """Async client for the Helius RPC, DAS, enhanced-transaction and webhook APIs."""

    def __init__(self, settings: HeliusSettings, dispatcher: Optional[RequestDispatcher] = None) -> None:
        if not settings.api_key:
            raise ProviderMisconfigured("HELIUS_API_KEY is required")
        self.settings = settings
        self.request_factory = HeliusRequestFactory(api_key=settings.api_key, cluster=settings.cluster)
        self._dispatcher = dispatcher or RequestDispatcher(
            timeout=settings.timeout,
            connect_timeout=settings.connect_timeout,
            log_bodies=settings.log_bodies,
        )
        self._owns_dispatcher = dispatcher is None

    async def __aenter__(self) -> "HeliusClient":
        await self._dispatcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_dispatcher:
            await self._dispatcher.__aexit__(exc_type, exc, tb)

    async def aclose(self) -> None:
        if self._owns_dispatcher:
            await self._dispatcher.aclose()

    # JSON-RPC

    async def rpc_call(self, method: str, params: Any, result_type: Any) -> Any:
        spec = self.request_factory.build_rpc_request(method, params)
        response = await self._dispatcher.request(spec, RpcResponse[result_type])
        return response.result

    async def get_block_height(self) -> int:
        return await self.rpc_call("getBlockHeight", [], int)

    async def get_latest_blockhash(self) -> Dict[str, Any]:
        result = await self.rpc_call("getLatestBlockhash", [], Dict[str, Any])
        return result.get("value", result)

    # DAS

    async def get_asset(self, params: GetAssetParams) -> GetAssetResponse:
        return await self.rpc_call("getAsset", params, GetAssetResponse)

    async def get_asset_batch(self, params: GetAssetBatchParams) -> List[GetAssetResponse]:
        return await self.rpc_call("getAssetBatch", params, List[GetAssetResponse])

    async def get_asset_proof(self, params: GetAssetProofParams) -> GetAssetProofResponse:
        return await self.rpc_call("getAssetProof", params, GetAssetProofResponse)

    async def get_asset_proof_batch(self, params: GetAssetProofBatchParams) -> AssetProofBatch:
        return await self.rpc_call("getAssetProofBatch", params, AssetProofBatch)

    async def get_assets_by_owner(self, params: GetAssetsByOwnerParams) -> GetAssetResponseList:
        return await self.rpc_call("getAssetsByOwner", params, GetAssetResponseList)

    async def get_assets_by_authority(self, params: GetAssetsByAuthorityParams) -> GetAssetResponseList:
        return await self.rpc_call("getAssetsByAuthority", params, GetAssetResponseList)

    async def get_assets_by_creator(self, params: GetAssetsByCreatorParams) -> GetAssetResponseList:
        return await self.rpc_call("getAssetsByCreator", params, GetAssetResponseList)

    async def get_assets_by_group(self, params: GetAssetsByGroupParams) -> GetAssetResponseList:
        return await self.rpc_call("getAssetsByGroup", params, GetAssetResponseList)

    async def search_assets(self, params: SearchAssetsParams) -> GetAssetResponseList:
        return await self.rpc_call("searchAssets", params, GetAssetResponseList)

    async def get_token_accounts(self, params: GetTokenAccountsParams) -> GetTokenAccountsResponse:
        return await self.rpc_call("getTokenAccounts", params, GetTokenAccountsResponse)

    # priority fees

    async def get_priority_fee_estimate(
        self, request: GetPriorityFeeEstimateRequest
    ) -> GetPriorityFeeEstimateResponse:
        return await self.rpc_call("getPriorityFeeEstimate", [request], GetPriorityFeeEstimateResponse)

    async def get_priority_fee(
        self,
        level: PriorityLevel = PriorityLevel.MEDIUM,
        account_keys: Optional[Sequence[str]] = None,
        transaction: Optional[str] = None,
    ) -> float:
        request = GetPriorityFeeEstimateRequest(
            transaction=transaction,
            account_keys=list(account_keys) if account_keys is not None else None,
            options=FeeLevelRequest(priority_level=level),
        )
        response = await self.get_priority_fee_estimate(request)
        if not isinstance(response, PriorityFeeEstimate):
            raise InvalidFeeResponse(response.model_dump_json(by_alias=True))
        return response.priority_fee_estimate

    async def get_priority_fee_levels(
        self,
        account_keys: Optional[Sequence[str]] = None,
        transaction: Optional[str] = None,
        lookback_slots: int = 150,
    ) -> PriorityFeeLevels:
        request = GetPriorityFeeEstimateRequest(
            transaction=transaction,
            account_keys=list(account_keys) if account_keys is not None else None,
            options=AllFeeLevelsRequest(lookback_slots=lookback_slots),
        )
        response = await self.get_priority_fee_estimate(request)
        if not isinstance(response, PriorityFeeLevelsResponse):
            raise InvalidFeeResponse(response.model_dump_json(by_alias=True))
        return response.priority_fee_levels

    # enhanced transactions

    async def parse_transactions(self, signatures: Sequence[str]) -> List[EnhancedTransaction]:
        """Parse ``signatures``, one request per 100 signatures, results in input order."""
        parsed: List[EnhancedTransaction] = []
        for request in ParseTransactionsRequest.from_signatures(list(signatures)):
            spec = self.request_factory.build_parse_transactions_request(request)
            parsed.extend(await self._dispatcher.request(spec, List[EnhancedTransaction]))
        return parsed

    async def parsed_transaction_history(self, address: str) -> List[EnhancedTransaction]:
        spec = self.request_factory.build_transaction_history_request(address)
        return await self._dispatcher.request(spec, List[EnhancedTransaction])

    async def get_names(self, address: str) -> Names:
        spec = self.request_factory.build_names_request(address)
        return await self._dispatcher.request(spec, Names)

    # webhooks

    async def get_all_webhooks(self) -> List[Webhook]:
        return await self._dispatcher.request(self.request_factory.build_webhooks_request(), List[Webhook])

    async def get_webhook_by_id(self, webhook_id: str) -> Webhook:
        return await self._dispatcher.request(self.request_factory.build_webhook_request(webhook_id), Webhook)

    async def create_webhook(self, request: CreateWebhookRequest) -> Webhook:
        spec = self.request_factory.build_webhook_create_request(request)
        return await self._dispatcher.request(spec, Webhook)

    async def edit_webhook(self, request: EditWebhookRequest) -> Webhook:
        spec = self.request_factory.build_webhook_edit_request(request.webhook_id, request.data)
        return await self._dispatcher.request(spec, Webhook)

    async def delete_webhook(self, webhook_id: str) -> None:
        await self._dispatcher.request(self.request_factory.build_webhook_delete_request(webhook_id), None)

    async def append_addresses_to_webhook(self, webhook_id: str, new_addresses: Sequence[str]) -> Webhook:
        webhook = await self.get_webhook_by_id(webhook_id)
        data = webhook.data()
        data.account_addresses = [*data.account_addresses, *new_addresses]
        logger.info("adding %d addresses to webhook %s", len(new_addresses), webhook_id)
        return await self.edit_webhook(EditWebhookRequest(webhook_id=webhook_id, data=data))


__all__ = ["HeliusClient", "HeliusSettings"]

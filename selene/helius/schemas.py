from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

from selene.helius.enums import (
    AccountWebhookEncoding,
    AccountWebhookEncodingField,
    PriorityLevel,
    TransactionTypeField,
    TxnStatus,
    WebhookType,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class SnakeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class WebhookData(CamelModel):
    webhook_url: str = Field(default="", alias="webhookURL")
    transaction_types: List[TransactionTypeField] = Field(default_factory=list)
    account_addresses: List[str] = Field(default_factory=list)
    webhook_type: WebhookType = WebhookType.ENHANCED
    auth_header: Optional[str] = None
    txn_status: TxnStatus = TxnStatus.ALL
    encoding: AccountWebhookEncodingField = AccountWebhookEncoding.JSON_PARSED

    @model_serializer(mode="wrap")
    def _drop_empty_transaction_types(self, handler) -> Dict[str, Any]:
        data = handler(self)
        if not self.transaction_types:
            data.pop("transactionTypes", None)
            data.pop("transaction_types", None)
        return data


class Webhook(WebhookData):
    """A webhook as Helius returns it.

    Identifying fields are required: a body without them, such as a JSON-RPC
    error, does not decode as a webhook.
    """

    webhook_id: str = Field(alias="webhookID")
    wallet: str
    webhook_url: str = Field(alias="webhookURL")
    transaction_types: List[TransactionTypeField]
    account_addresses: List[str]
    webhook_type: WebhookType

    def data(self) -> WebhookData:
        return WebhookData(**{name: getattr(self, name) for name in WebhookData.model_fields})


class CreateWebhookRequest(WebhookData):
    pass


class EditWebhookRequest(BaseModel):
    webhook_id: str
    data: WebhookData


class Names(CamelModel):
    domain_names: List[str]


class AllFeeLevelsRequest(CamelModel):
    include_all_priority_fee_levels: bool = True
    # valid range 1-150
    lookback_slots: int = Field(default=150, ge=1, le=150)


class FeeLevelRequest(CamelModel):
    priority_level: PriorityLevel = PriorityLevel.MEDIUM


class GetPriorityFeeEstimateRequest(CamelModel):
    """Estimate for a serialized transaction or for a list of account keys."""

    transaction: Optional[str] = None
    account_keys: Optional[List[str]] = None
    options: Union[AllFeeLevelsRequest, FeeLevelRequest] = Field(default_factory=AllFeeLevelsRequest)


class PriorityFeeLevels(CamelModel):
    min: Optional[float] = None
    low: float = 0.0
    medium: float = 0.0
    high: float = 0.0
    very_high: float = 0.0
    unsafe_max: float = 0.0


class PriorityFeeEstimate(CamelModel):
    priority_fee_estimate: float


class PriorityFeeLevelsResponse(CamelModel):
    priority_fee_levels: PriorityFeeLevels


GetPriorityFeeEstimateResponse = Union[PriorityFeeEstimate, PriorityFeeLevelsResponse]


__all__ = [
    "AllFeeLevelsRequest",
    "CamelModel",
    "CreateWebhookRequest",
    "EditWebhookRequest",
    "FeeLevelRequest",
    "GetPriorityFeeEstimateRequest",
    "GetPriorityFeeEstimateResponse",
    "Names",
    "PriorityFeeEstimate",
    "PriorityFeeLevels",
    "PriorityFeeLevelsResponse",
    "SnakeModel",
    "Webhook",
    "WebhookData",
]

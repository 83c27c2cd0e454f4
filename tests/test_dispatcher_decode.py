from typing import Dict, List, Optional

import pytest
from pydantic import BaseModel

from selene.core.dispatcher import decode_body, default_value, serialize_body
from selene.core.exceptions import DeserializationError, RpcError
from selene.core.request_spec import RpcRequest, RpcResponse
from selene.helius.enums import WebhookType
from selene.helius.schemas import (
    FeeLevelRequest,
    GetPriorityFeeEstimateRequest,
    GetPriorityFeeEstimateResponse,
    Names,
    PriorityFeeEstimate,
    Webhook,
)


class Payload(BaseModel):
    value: int


def test_empty_body_returns_default_values():
    assert decode_body("", None) is None
    assert decode_body("", List[str]) == []
    assert decode_body("", Dict[str, int]) == {}
    assert decode_body("", Optional[int]) is None
    assert decode_body("", Names) == Names(domain_names=[])
    assert decode_body("", Webhook).webhook_id == ""


def test_empty_body_zero_fills_scalars_unions_and_models():
    assert default_value(int) == 0
    assert default_value(str) == ""
    assert default_value(float) == 0.0
    assert default_value(bool) is False
    assert decode_body("", Payload) == Payload(value=0)
    assert decode_body("", GetPriorityFeeEstimateResponse) == PriorityFeeEstimate(priority_fee_estimate=0.0)
    assert decode_body("", Webhook).webhook_type is WebhookType.ENHANCED


class Opaque:
    pass


def test_empty_body_without_default_is_a_deserialization_error():
    with pytest.raises(TypeError):
        default_value(Opaque)
    with pytest.raises(DeserializationError):
        decode_body("", Opaque)


def test_rpc_error_body_is_not_a_webhook_or_names():
    body = '{"id":"1","error":{"code":-32000,"message":"boom"}}'
    with pytest.raises(RpcError):
        decode_body(body, Webhook)
    with pytest.raises(RpcError):
        decode_body(body, Names)


def test_rpc_error_shape_becomes_rpc_error():
    body = '{"id":"1","error":{"code":-32000,"message":"boom"}}'
    with pytest.raises(RpcError) as info:
        decode_body(body, RpcResponse[int])
    assert info.value.code == -32000
    assert info.value.message == "boom"


def test_success_shape_wins_over_error_shape():
    assert decode_body('{"jsonrpc":"2.0","id":"1","result":42}', RpcResponse[int]).result == 42


def test_garbage_is_a_deserialization_error():
    with pytest.raises(DeserializationError) as info:
        decode_body("<html>nope</html>", Payload)
    assert info.value.text == "<html>nope</html>"


def test_request_envelope_round_trip():
    request = RpcRequest.new("getAsset", {"id": "F9Lw"})
    encoded = request.model_dump_json()
    decoded = RpcRequest[Dict[str, str]].model_validate_json(encoded)
    assert decoded.jsonrpc == "2.0"
    assert decoded.id == "1"
    assert decoded.method == "getAsset"
    assert decoded.params == {"id": "F9Lw"}


def test_serialize_body_uses_aliases_and_drops_none():
    request = GetPriorityFeeEstimateRequest(account_keys=["JUP6"], options=FeeLevelRequest())
    assert serialize_body([request]) == [
        {"accountKeys": ["JUP6"], "options": {"priorityLevel": "MEDIUM"}}
    ]

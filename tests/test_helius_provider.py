import asyncio
import json
from pathlib import Path

import httpx
import pytest
from pydantic import ValidationError

from selene.core.dispatcher import RequestDispatcher
from selene.core.exceptions import InvalidFeeResponse, NotFound, ProviderMisconfigured, RpcError
from selene.core.fixtures import load_fixture, load_fixture_text
from selene.helius.das_schemas import GetAssetParams
from selene.helius.enhanced_schemas import ParseTransactionsRequest
from selene.helius.enums import PriorityLevel
from selene.helius.provider import HeliusClient, HeliusSettings
from selene.helius.request_factory import Cluster


FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures" / "helius"


def _client(handler, calls=None) -> HeliusClient:
    def record(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            body = json.loads(request.content) if request.content else None
            calls.append((request.method, request.url.path, dict(request.url.params), body))
        return handler(request)

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return HeliusClient(HeliusSettings(api_key="test-key"), dispatcher=RequestDispatcher(async_client=async_client))


def test_missing_api_key_is_rejected():
    with pytest.raises(ProviderMisconfigured):
        HeliusClient(HeliusSettings(api_key=""))


def test_settings_from_env_and_config(monkeypatch):
    monkeypatch.setenv("HELIUS_API_KEY", " env-key ")
    monkeypatch.delenv("HELIUS_CLUSTER", raising=False)
    monkeypatch.setenv("HELIUS_LOG_BODIES", "true")
    settings = HeliusSettings.from_env({"helius": {"cluster": "devnet", "timeout_sec": 3}})
    assert settings.api_key == "env-key"
    assert settings.cluster is Cluster.DEVNET
    assert settings.timeout == 3.0
    assert settings.log_bodies is True

    assert HeliusSettings.from_env({}, api_key="cli-key").api_key == "cli-key"


def test_block_height_uses_rpc_envelope():
    calls = []
    client = _client(lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": "1", "result": 250_000_000}), calls)
    assert asyncio.run(client.get_block_height()) == 250_000_000
    method, path, params, body = calls[0]
    assert (method, path, params) == ("POST", "/", {"api-key": "test-key"})
    assert body == {"jsonrpc": "2.0", "id": "1", "method": "getBlockHeight", "params": []}


def test_rpc_error_is_raised():
    text = load_fixture_text(FIXTURE_DIR, "rpc_error.json")
    client = _client(lambda request: httpx.Response(200, text=text))
    with pytest.raises(RpcError) as info:
        asyncio.run(client.get_block_height())
    assert info.value.code == -32005


def test_get_asset_sends_camel_case_params():
    calls = []
    text = load_fixture_text(FIXTURE_DIR, "get_asset.json")
    client = _client(lambda request: httpx.Response(200, text=text), calls)
    asset = asyncio.run(client.get_asset(GetAssetParams(id="F9Lw3ki3hJ7PF9HQXsBzoY8GyE6sPoEZZdXJBsTTD2rk")))
    assert asset.id == "F9Lw3ki3hJ7PF9HQXsBzoY8GyE6sPoEZZdXJBsTTD2rk"
    assert calls[0][3]["params"] == {"id": "F9Lw3ki3hJ7PF9HQXsBzoY8GyE6sPoEZZdXJBsTTD2rk"}


def test_priority_fee_returns_single_estimate():
    calls = []
    text = load_fixture_text(FIXTURE_DIR, "priority_fee_estimate.json")
    client = _client(lambda request: httpx.Response(200, text=text), calls)
    fee = asyncio.run(client.get_priority_fee(PriorityLevel.HIGH, account_keys=["JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"]))
    assert fee == 120000.0
    assert calls[0][3]["method"] == "getPriorityFeeEstimate"
    assert calls[0][3]["params"] == [
        {
            "accountKeys": ["JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"],
            "options": {"priorityLevel": "HIGH"},
        }
    ]


def test_priority_fee_mismatch_raises_invalid_fee_response():
    text = load_fixture_text(FIXTURE_DIR, "priority_fee_levels.json")
    client = _client(lambda request: httpx.Response(200, text=text))
    with pytest.raises(InvalidFeeResponse):
        asyncio.run(client.get_priority_fee())


def test_priority_fee_levels():
    calls = []
    text = load_fixture_text(FIXTURE_DIR, "priority_fee_levels.json")
    client = _client(lambda request: httpx.Response(200, text=text), calls)
    levels = asyncio.run(client.get_priority_fee_levels(account_keys=["JUP6"], lookback_slots=50))
    assert levels.medium == 10082.0
    assert calls[0][3]["params"][0]["options"] == {"includeAllPriorityFeeLevels": True, "lookbackSlots": 50}

    single = load_fixture_text(FIXTURE_DIR, "priority_fee_estimate.json")
    with pytest.raises(InvalidFeeResponse):
        asyncio.run(_client(lambda request: httpx.Response(200, text=single)).get_priority_fee_levels())


def test_get_names():
    names = load_fixture(FIXTURE_DIR, "names.json")
    client = _client(lambda request: httpx.Response(200, json=names))
    result = asyncio.run(client.get_names("Trader111111111111111111111111111111"))
    assert result.domain_names[0] == "moonwalker.sol"


def test_parsed_transaction_history():
    calls = []
    txs = load_fixture(FIXTURE_DIR, "enhanced_transactions.json")
    client = _client(lambda request: httpx.Response(200, json=txs), calls)
    history = asyncio.run(client.parsed_transaction_history("Trader111111111111111111111111111111"))
    assert [tx.signature for tx in history] == ["5gB1LrYp", "3kVq9wZe"]
    assert calls[0][:2] == ("GET", "/v0/addresses/Trader111111111111111111111111111111/transactions")


def test_append_addresses_preserves_order():
    webhook = load_fixture(FIXTURE_DIR, "webhook.json")
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=webhook)
        updated = dict(webhook, **json.loads(request.content))
        return httpx.Response(200, json=updated)

    client = _client(handler, calls)
    result = asyncio.run(
        client.append_addresses_to_webhook("wh_123", ["Dest2222222222222222222222222222222"])
    )

    assert result.account_addresses == [
        "Trader111111111111111111111111111111",
        "Dest2222222222222222222222222222222",
    ]
    method, path, params, body = calls[1]
    assert (method, path, params) == ("PUT", "/v0/webhooks/wh_123", {"api-key": "test-key"})
    assert body["accountAddresses"] == [
        "Trader111111111111111111111111111111",
        "Dest2222222222222222222222222222222",
    ]
    assert body["transactionTypes"] == ["TRANSFER", "SOME_FUTURE_TYPE"]
    assert "webhookID" not in body


def test_delete_missing_webhook_raises_not_found():
    client = _client(lambda request: httpx.Response(404, text="not found"))
    with pytest.raises(NotFound) as info:
        asyncio.run(client.delete_webhook("wh_missing"))
    assert info.value.path == "/v0/webhooks/wh_missing"


def test_parse_transactions_sends_one_request_per_hundred_signatures():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        signatures = json.loads(request.content)["transactions"]
        return httpx.Response(200, json=[{"signature": s, "type": "TRANSFER", "source": "SYSTEM_PROGRAM"} for s in signatures])

    client = _client(handler, calls)
    signatures = [f"sig{i}" for i in range(250)]
    parsed = asyncio.run(client.parse_transactions(signatures))

    assert [(method, path) for method, path, _, _ in calls] == [("POST", "/v0/transactions")] * 3
    assert [len(body["transactions"]) for _, _, _, body in calls] == [100, 100, 50]
    assert [tx.signature for tx in parsed] == signatures


def test_parse_request_rejects_more_than_a_hundred_signatures():
    with pytest.raises(ValidationError):
        ParseTransactionsRequest(transactions=[f"sig{i}" for i in range(101)])


def test_append_addresses_stops_on_rpc_error():
    calls = []
    text = load_fixture_text(FIXTURE_DIR, "rpc_error.json")
    client = _client(lambda request: httpx.Response(200, text=text), calls)
    with pytest.raises(RpcError):
        asyncio.run(client.append_addresses_to_webhook("wh_123", ["Dest2222222222222222222222222222222"]))
    assert [method for method, _, _, _ in calls] == ["GET"]

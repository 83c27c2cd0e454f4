import io
import logging

import pytest
from rich.console import Console

from selene import __version__
from selene.helius.enums import TransactionType, WebhookType
from selene.helius.schemas import Webhook
from selene.main import _build_parser, build_create_request, main, render_webhooks


@pytest.fixture(autouse=True)
def _reset_root_logging():
    yield
    logging.getLogger().handlers.clear()


def test_unknown_command_is_rejected() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["deploy"])


def test_webhook_add_requires_addresses() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["webhook", "add", "--id", "wh_123"])


def test_command_aliases() -> None:
    parser = _build_parser()
    args = parser.parse_args(["w", "create", "--url", "https://example.com/hook", "--transfer-only", "A", "B"])
    assert args.command == "w"
    assert args.webhook_command == "create"
    assert args.transfer_only is True
    assert args.devnet is False
    assert args.addresses == ["A", "B"]

    serve = parser.parse_args(["s", "--chat-id", "-100123", "--port", "8080"])
    assert serve.chat_id == -100123
    assert serve.port == 8080


def test_env_defaults(monkeypatch) -> None:
    monkeypatch.setenv("HELIUS_API_KEY", "env-key")
    monkeypatch.setenv("SELENE_CHAT_ID", "77")
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    args = _build_parser().parse_args(["serve"])
    assert args.helius_api_key == "env-key"
    assert args.chat_id == 77
    assert args.bot_token == "123:abc"


def test_create_request_types() -> None:
    transfer = build_create_request("https://example.com/hook", ["A"], transfer_only=True, devnet=True)
    assert transfer.transaction_types == [TransactionType.TRANSFER]
    assert transfer.webhook_type is WebhookType.ENHANCED_DEVNET

    anything = build_create_request("https://example.com/hook", ["A"], transfer_only=False, devnet=False)
    assert anything.transaction_types == [TransactionType.ANY]
    assert anything.webhook_type is WebhookType.ENHANCED


def test_version(capsys) -> None:
    assert main(["version"]) == 0
    assert capsys.readouterr().out.strip() == f"selene {__version__}"


def test_missing_api_key_exits_with_error(monkeypatch, capsys) -> None:
    monkeypatch.delenv("HELIUS_API_KEY", raising=False)
    assert main(["webhook", "--helius-api-key", "", "list"]) == 1
    assert "HELIUS_API_KEY is required" in capsys.readouterr().err


def test_serve_requires_bot_token(monkeypatch, capsys) -> None:
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    assert main(["serve", "--helius-api-key", "k", "--chat-id", "1"]) == 1
    assert "TELEGRAM_BOT_TOKEN" in capsys.readouterr().err


def test_render_webhooks_table() -> None:
    console = Console(file=io.StringIO(), width=200)
    webhook = Webhook(
        webhook_id="wh_123",
        wallet="W",
        webhook_url="https://example.com/hook",
        transaction_types=[TransactionType.TRANSFER, "SOME_FUTURE_TYPE"],
        account_addresses=["A", "B"],
        webhook_type=WebhookType.ENHANCED,
    )
    render_webhooks([webhook], console)
    output = console.file.getvalue()
    assert "wh_123" in output
    assert "TRANSFER, SOME_FUTURE_TYPE" in output

    empty = Console(file=io.StringIO())
    render_webhooks([], empty)
    assert "no webhooks found" in empty.file.getvalue()


def test_bad_chat_id_env_only_affects_serve(monkeypatch, capsys) -> None:
    monkeypatch.setenv("SELENE_CHAT_ID", "abc")
    assert main(["version"]) == 0
    capsys.readouterr()
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["serve"])


def test_unknown_cluster_exits_with_error(monkeypatch, capsys) -> None:
    monkeypatch.setenv("HELIUS_CLUSTER", "moon")
    assert main(["webhook", "--helius-api-key", "k", "list"]) == 1
    assert "unknown Helius cluster" in capsys.readouterr().err


def test_missing_config_file_exits_with_error(tmp_path, capsys) -> None:
    assert main(["--config", str(tmp_path / "nope.yaml"), "version"]) == 1
    assert "Config file not found" in capsys.readouterr().err

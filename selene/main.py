from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import Any, Dict, List, Optional

import uvicorn
from rich.console import Console
from rich.table import Table

from selene import __version__
from selene.config import config_section, load_config
from selene.core.exceptions import HeliusError, ProviderMisconfigured
from selene.helius.enums import TransactionType, WebhookType
from selene.helius.provider import HeliusClient, HeliusSettings
from selene.helius.schemas import CreateWebhookRequest, Webhook
from selene.logging_config import setup_logging
from selene.relay.bot import DEFAULT_EXPLORER_TX_URL, SeleneBot, TelegramNotifier
from selene.relay.name_cache import NameCache
from selene.relay.server import create_app


def render_webhooks(webhooks: List[Webhook], console: Console) -> None:
    if not webhooks:
        console.print("no webhooks found")
        return
    table = Table(title="Helius webhooks")
    table.add_column("id")
    table.add_column("url")
    table.add_column("type")
    table.add_column("addresses", justify="right")
    table.add_column("transaction types")
    for webhook in webhooks:
        types = ", ".join(getattr(t, "value", t) for t in webhook.transaction_types) or "-"
        table.add_row(
            webhook.webhook_id,
            webhook.webhook_url,
            webhook.webhook_type.value,
            str(len(webhook.account_addresses)),
            types,
        )
    console.print(table)


def build_create_request(url: str, addresses: List[str], transfer_only: bool, devnet: bool) -> CreateWebhookRequest:
    return CreateWebhookRequest(
        webhook_url=url,
        transaction_types=[TransactionType.TRANSFER if transfer_only else TransactionType.ANY],
        account_addresses=addresses,
        webhook_type=WebhookType.ENHANCED_DEVNET if devnet else WebhookType.ENHANCED,
    )


async def cmd_webhook(args: argparse.Namespace, config: Dict[str, Any], console: Console) -> None:
    settings = HeliusSettings.from_env(config, api_key=args.helius_api_key)
    async with HeliusClient(settings) as helius:
        command = args.webhook_command or "list"
        if command == "list":
            render_webhooks(await helius.get_all_webhooks(), console)
        elif command == "create":
            request = build_create_request(args.url, args.addresses, args.transfer_only, args.devnet)
            response = await helius.create_webhook(request)
            console.print(f"id {response.webhook_id}")
        elif command == "delete":
            await helius.delete_webhook(args.id)
            console.print(f"deleted {args.id}")
        elif command == "add":
            response = await helius.append_addresses_to_webhook(args.id, args.addresses)
            console.print(f"{response.webhook_id} now watches {len(response.account_addresses)} addresses")


def cmd_serve(args: argparse.Namespace, config: Dict[str, Any]) -> None:
    relay = config_section(config, "relay")
    if not args.bot_token:
        raise ProviderMisconfigured("TELEGRAM_BOT_TOKEN is required to serve")
    if args.chat_id is None:
        raise ProviderMisconfigured("SELENE_CHAT_ID is required to serve")

    helius = HeliusClient(HeliusSettings.from_env(config, api_key=args.helius_api_key))
    notifier = TelegramNotifier(args.bot_token, args.chat_id)
    bot = SeleneBot(
        helius,
        notifier,
        NameCache(shards=int(relay.get("name_cache_shards", 16))),
        explorer_tx_url=relay.get("explorer_tx_url", DEFAULT_EXPLORER_TX_URL),
    )

    async def startup() -> None:
        await notifier.start()

    async def shutdown() -> None:
        await notifier.close()
        await helius.aclose()

    app = create_app(bot, on_startup=startup, on_shutdown=shutdown)
    host = args.host or relay.get("host", "0.0.0.0")
    port = args.port or int(relay.get("port", 3030))
    uvicorn.run(app, host=host, port=port, log_config=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="selene", description="Telegram bot for Helius webhooks")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (DEBUG, INFO, ...)")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("version", help="Show version")

    webhook = commands.add_parser("webhook", aliases=["w"], help="List, create, delete and extend webhooks")
    webhook.add_argument("--helius-api-key", type=str, default=os.getenv("HELIUS_API_KEY"))
    webhook_commands = webhook.add_subparsers(dest="webhook_command")
    webhook_commands.add_parser("list", help="List webhooks")
    create = webhook_commands.add_parser("create", help="Create an enhanced webhook")
    create.add_argument("--url", type=str, required=True, help="URL Helius will POST transactions to")
    create.add_argument("--transfer-only", action="store_true", help="Only deliver TRANSFER transactions")
    create.add_argument("--devnet", action="store_true", help="Create a devnet webhook")
    create.add_argument("addresses", nargs="*", help="Account addresses to watch")
    delete = webhook_commands.add_parser("delete", help="Delete a webhook")
    delete.add_argument("--id", type=str, required=True)
    add = webhook_commands.add_parser("add", help="Append addresses to a webhook")
    add.add_argument("--id", type=str, required=True)
    add.add_argument("addresses", nargs="+", help="Account addresses to append")

    serve = commands.add_parser("serve", aliases=["s"], help="Relay Helius webhooks to a Telegram chat")
    serve.add_argument("--helius-api-key", type=str, default=os.getenv("HELIUS_API_KEY"))
    serve.add_argument("--chat-id", type=int, default=os.getenv("SELENE_CHAT_ID") or None, help="Telegram chat id")
    serve.add_argument("--bot-token", type=str, default=os.getenv("TELEGRAM_BOT_TOKEN"), help="Telegram bot token")
    serve.add_argument("--host", type=str, default=None)
    serve.add_argument("--port", type=int, default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    setup_logging(args.log_level or config_section(config, "logging").get("level"))

    try:
        if args.command == "version":
            print(f"selene {__version__}")
        elif args.command in ("webhook", "w"):
            asyncio.run(cmd_webhook(args, config, Console()))
        elif args.command in ("serve", "s"):
            cmd_serve(args, config)
    except (HeliusError, ProviderMisconfigured) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

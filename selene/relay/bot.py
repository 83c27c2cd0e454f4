from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol, Sequence

import telegram
from telegram.error import TelegramError

from selene.core.exceptions import HeliusError
from selene.helius.enhanced_schemas import EnhancedTransaction
from selene.helius.provider import HeliusClient
from selene.relay.metrics import RelayMetrics
from selene.relay.name_cache import AccountName, NameCache

SYSTEM_PROGRAM = "11111111111111111111111111111111"
DEFAULT_EXPLORER_TX_URL = "https://xray.helius.xyz/tx/"


class Notifier(Protocol):
    async def send(self, text: str) -> None:
        ...


class TelegramNotifier:
    def __init__(self, token: str, chat_id: int, bot: Optional[telegram.Bot] = None) -> None:
        self.chat_id = chat_id
        self.bot = bot or telegram.Bot(token)

    async def start(self) -> None:
        await self.bot.initialize()

    async def close(self) -> None:
        await self.bot.shutdown()

    async def send(self, text: str) -> None:
        await self.bot.send_message(chat_id=self.chat_id, text=text)


def format_transaction(tx: EnhancedTransaction, explorer_tx_url: str = DEFAULT_EXPLORER_TX_URL) -> str:
    return f"{tx.description}\n{explorer_tx_url}{tx.signature}"


def format_message(
    transactions: Sequence[EnhancedTransaction],
    names: Iterable[AccountName],
    explorer_tx_url: str = DEFAULT_EXPLORER_TX_URL,
) -> str:
    lines = [format_transaction(tx, explorer_tx_url) for tx in transactions]
    resolved = [str(name) for name in names if name.resolved]
    message = "\n".join(lines)
    if resolved:
        message = f"{message}\n\n" + "\n".join(resolved)
    return message


def accounts_of(transactions: Sequence[EnhancedTransaction]) -> List[str]:
    seen: List[str] = []
    for tx in transactions:
        for account in tx.account_data:
            if account.account == SYSTEM_PROGRAM or account.account in seen:
                continue
            seen.append(account.account)
    return seen


class SeleneBot:
    """Turns Helius webhook deliveries into chat notifications."""

    def __init__(
        self,
        helius: HeliusClient,
        notifier: Notifier,
        name_cache: NameCache,
        logger: Optional[logging.Logger] = None,
        metrics: Optional[RelayMetrics] = None,
        explorer_tx_url: str = DEFAULT_EXPLORER_TX_URL,
    ) -> None:
        self.helius = helius
        self.notifier = notifier
        self.name_cache = name_cache
        self.logger = logger or logging.getLogger(__name__)
        self.metrics = metrics or RelayMetrics()
        self.explorer_tx_url = explorer_tx_url

    async def _lookup_name(self, address: str) -> AccountName:
        self.logger.info("looking up name for account %s", address)
        try:
            names = await self.helius.get_names(address)
        except HeliusError as exc:
            self.metrics.name_lookups.labels(outcome="error").inc()
            self.logger.error("failed getting name for account %s: %s", address, exc)
            return AccountName.unresolved(address)
        self.metrics.name_lookups.labels(outcome="ok").inc()
        if names.domain_names:
            return AccountName(address=address, name=names.domain_names[0])
        return AccountName.unresolved(address)

    async def find_names(self, transactions: Sequence[EnhancedTransaction]) -> List[AccountName]:
        return [
            await self.name_cache.get_or_resolve(address, self._lookup_name)
            for address in accounts_of(transactions)
        ]

    async def handle_hook(self, transactions: Sequence[EnhancedTransaction]) -> None:
        if not transactions:
            return
        names = await self.find_names(transactions)
        text = format_message(transactions, names, self.explorer_tx_url)
        try:
            await self.notifier.send(text)
        except TelegramError as exc:
            self.metrics.notifications.labels(outcome="error").inc()
            self.logger.error("failed sending notification: %s", exc)
            return
        self.metrics.notifications.labels(outcome="sent").inc()
        self.logger.info("sent notification for %d transactions", len(transactions))

    async def health(self) -> int:
        return await self.helius.get_block_height()


__all__ = [
    "DEFAULT_EXPLORER_TX_URL",
    "Notifier",
    "SYSTEM_PROGRAM",
    "SeleneBot",
    "TelegramNotifier",
    "accounts_of",
    "format_message",
    "format_transaction",
]

from selene.relay.bot import SeleneBot, TelegramNotifier
from selene.relay.metrics import RelayMetrics
from selene.relay.name_cache import AccountName, NameCache
from selene.relay.server import create_app

__all__ = [
    "AccountName",
    "NameCache",
    "RelayMetrics",
    "SeleneBot",
    "TelegramNotifier",
    "create_app",
]

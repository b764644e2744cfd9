"""User and wallet persistence."""

from tradeapi.store.models import TradeSettings, User, UserSettings, Wallet
from tradeapi.store.repository import UserRepository

__all__ = [
    "TradeSettings",
    "User",
    "UserRepository",
    "UserSettings",
    "Wallet",
]

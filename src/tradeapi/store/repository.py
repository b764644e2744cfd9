"""Repository for user and wallet documents."""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from tradeapi.errors import NotFoundError
from tradeapi.store.models import User, Wallet

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


class UserRepository:
    """Repository for Telegram users and their custodied wallets."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database[USERS_COLLECTION]

    async def ensure_indexes(self) -> None:
        """Create the unique telegramId index."""
        await self.collection.create_index("telegramId", unique=True)

    async def get_user_by_telegram_id(self, telegram_id: str) -> Optional[User]:
        """Get user by Telegram ID."""
        doc = await self.collection.find_one({"telegramId": str(telegram_id)})
        if doc is None:
            return None
        return User.model_validate(doc)

    async def get_or_create_user(self, telegram_id: str) -> User:
        """Get existing user or create one with default settings."""
        user = await self.get_user_by_telegram_id(telegram_id)
        if user is not None:
            return user

        user = User(telegram_id=str(telegram_id))
        await self.collection.insert_one(user.to_document())
        logger.info(f"Created user {user.telegram_id}")
        return user

    async def add_wallet(self, telegram_id: str, wallet: Wallet) -> User:
        """Append a wallet to the user's wallet list."""
        doc = await self.collection.find_one_and_update(
            {"telegramId": str(telegram_id)},
            {"$push": {"wallets": wallet.model_dump(by_alias=True)}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError("User not found.")
        logger.info(f"Added wallet {wallet.public_key} for user {telegram_id}")
        return User.model_validate(doc)

    async def set_active_wallet(self, telegram_id: str, index: int) -> User:
        """Select the wallet used for trades."""
        user = await self.get_user_by_telegram_id(telegram_id)
        if user is None:
            raise NotFoundError("User not found.")
        if not 0 <= index < len(user.wallets):
            raise NotFoundError("Wallet index out of range.")

        await self.collection.update_one(
            {"telegramId": user.telegram_id},
            {"$set": {"activeWalletIndex": index}},
        )
        return user.model_copy(update={"active_wallet_index": index})

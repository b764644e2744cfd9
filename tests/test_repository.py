"""Tests for the users collection repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo import ReturnDocument

from tradeapi.errors import NotFoundError
from tradeapi.store.models import User, Wallet
from tradeapi.store.repository import UserRepository


def user_document(telegram_id: str = "12345", wallets: int = 1) -> dict:
    return {
        "_id": "665f1c2e9b1e8a0012345678",
        "telegramId": telegram_id,
        "wallets": [
            {"label": f"Wallet {i}", "publicKey": f"pub{i}", "secretKey": f"iv{i}:ct{i}"}
            for i in range(wallets)
        ],
        "activeWalletIndex": 0,
        "settings": {
            "buy": {"slippage": 1.0, "tradeAmount": 0.25},
            "sell": {"slippage": 0.5, "tradeAmount": 0.1},
        },
    }


@pytest.fixture
def collection() -> MagicMock:
    coll = MagicMock()
    coll.find_one = AsyncMock(return_value=None)
    coll.insert_one = AsyncMock()
    coll.update_one = AsyncMock()
    coll.find_one_and_update = AsyncMock(return_value=None)
    coll.create_index = AsyncMock()
    return coll


@pytest.fixture
def repo(collection) -> UserRepository:
    database = MagicMock()
    database.__getitem__.return_value = collection
    return UserRepository(database)


class TestUserLookup:
    """Tests for reading user documents."""

    @pytest.mark.asyncio
    async def test_get_user_parses_document(self, repo, collection):
        collection.find_one.return_value = user_document(wallets=2)

        user = await repo.get_user_by_telegram_id("12345")

        collection.find_one.assert_awaited_once_with({"telegramId": "12345"})
        assert user.telegram_id == "12345"
        assert [w.public_key for w in user.wallets] == ["pub0", "pub1"]
        assert user.active_wallet.public_key == "pub0"
        assert user.settings.buy.trade_amount == 0.25

    @pytest.mark.asyncio
    async def test_get_user_missing(self, repo):
        assert await repo.get_user_by_telegram_id("999") is None

    @pytest.mark.asyncio
    async def test_lookup_uses_string_id(self, repo, collection):
        await repo.get_user_by_telegram_id(12345)

        collection.find_one.assert_awaited_once_with({"telegramId": "12345"})

    @pytest.mark.asyncio
    async def test_ensure_indexes(self, repo, collection):
        await repo.ensure_indexes()

        collection.create_index.assert_awaited_once_with("telegramId", unique=True)


class TestUserWrites:
    """Tests for creating users and managing wallets."""

    @pytest.mark.asyncio
    async def test_get_or_create_inserts_defaults(self, repo, collection):
        user = await repo.get_or_create_user("12345")

        assert user.wallets == []
        doc = collection.insert_one.call_args.args[0]
        assert doc["telegramId"] == "12345"
        assert doc["activeWalletIndex"] == 0
        assert doc["settings"]["buy"] == {"slippage": 0.5, "tradeAmount": 0.1}

    @pytest.mark.asyncio
    async def test_get_or_create_existing(self, repo, collection):
        collection.find_one.return_value = user_document()

        user = await repo.get_or_create_user("12345")

        assert len(user.wallets) == 1
        collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_wallet(self, repo, collection):
        collection.find_one_and_update.return_value = user_document(wallets=2)
        wallet = Wallet(label="Wallet 1", public_key="pub1", secret_key="iv1:ct1")

        user = await repo.add_wallet("12345", wallet)

        query, update = collection.find_one_and_update.call_args.args
        assert query == {"telegramId": "12345"}
        assert update == {
            "$push": {"wallets": {"label": "Wallet 1", "publicKey": "pub1", "secretKey": "iv1:ct1"}}
        }
        assert collection.find_one_and_update.call_args.kwargs["return_document"] == ReturnDocument.AFTER
        assert len(user.wallets) == 2

    @pytest.mark.asyncio
    async def test_add_wallet_unknown_user(self, repo):
        wallet = Wallet(public_key="pub", secret_key="iv:ct")

        with pytest.raises(NotFoundError):
            await repo.add_wallet("999", wallet)

    @pytest.mark.asyncio
    async def test_set_active_wallet(self, repo, collection):
        collection.find_one.return_value = user_document(wallets=3)

        user = await repo.set_active_wallet("12345", 2)

        assert user.active_wallet_index == 2
        assert user.active_wallet.public_key == "pub2"
        collection.update_one.assert_awaited_once_with(
            {"telegramId": "12345"}, {"$set": {"activeWalletIndex": 2}}
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("index", [-1, 3])
    async def test_set_active_wallet_out_of_range(self, repo, collection, index):
        collection.find_one.return_value = user_document(wallets=3)

        with pytest.raises(NotFoundError):
            await repo.set_active_wallet("12345", index)

        collection.update_one.assert_not_awaited()


class TestUserModel:
    """Tests for the document model."""

    def test_active_wallet_out_of_range(self):
        user = User.model_validate({**user_document(), "activeWalletIndex": 5})
        assert user.active_wallet is None

    def test_secret_not_in_repr(self):
        wallet = Wallet(public_key="pub", secret_key="iv:ct")
        assert "iv:ct" not in repr(wallet)

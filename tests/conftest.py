"""Pytest configuration and fixtures."""

import base64
import os
from typing import Optional
from unittest.mock import AsyncMock

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

TEST_API_KEY = "test-api-key"
TEST_ENCRYPTION_KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"

# Set test environment
os.environ["API_KEY"] = TEST_API_KEY
os.environ["ENCRYPTION_KEY"] = TEST_ENCRYPTION_KEY
os.environ["MONGODB_URI"] = "mongodb://localhost:27017/tradeapi-test"

from tradeapi.config import Settings, load_settings
from tradeapi.crypto import CredentialVault
from tradeapi.routing.base import SwapProvider
from tradeapi.services.trade_executor import TradeExecutor
from tradeapi.signing.base import TransactionSubmitter
from tradeapi.signing.keys import secret_from_keypair
from tradeapi.store.models import User, Wallet
from tradeapi.store.repository import UserRepository

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def build_unsigned_tx(payer: Pubkey, co_signer: Optional[Pubkey] = None) -> bytes:
    """Serialize an unsigned transfer transaction paid by ``payer``.

    With ``co_signer`` the transfer is drawn from that account, so the
    transaction needs two signatures.
    """
    source = co_signer or payer
    ix = transfer(
        TransferParams(from_pubkey=source, to_pubkey=Pubkey.new_unique(), lamports=1_000)
    )
    message = Message.new_with_blockhash([ix], payer, Hash.default())
    signatures = [Signature.default()] * message.header.num_required_signatures
    return bytes(VersionedTransaction.populate(message, signatures))


@pytest.fixture
def settings() -> Settings:
    return load_settings()


@pytest.fixture
def vault() -> CredentialVault:
    return CredentialVault.from_hex(TEST_ENCRYPTION_KEY)


@pytest.fixture
def keypair() -> Keypair:
    return Keypair()


@pytest.fixture
def make_user(vault):
    """Factory for a user whose single wallet holds ``keypair``'s secret."""

    def _make(keypair: Keypair, telegram_id: str = "12345", public_key: Optional[str] = None) -> User:
        wallet = Wallet(
            label="Main",
            public_key=public_key or str(keypair.pubkey()),
            secret_key=vault.encrypt(secret_from_keypair(keypair)),
        )
        return User(telegram_id=telegram_id, wallets=[wallet])

    return _make


@pytest.fixture
def users() -> AsyncMock:
    repo = AsyncMock(spec=UserRepository)
    repo.get_user_by_telegram_id.return_value = None
    return repo


@pytest.fixture
def swap_provider(keypair) -> AsyncMock:
    provider = AsyncMock(spec=SwapProvider)
    unsigned = build_unsigned_tx(keypair.pubkey())
    provider.get_swap_transaction.return_value = base64.b64encode(unsigned).decode()
    return provider


@pytest.fixture
def submitter() -> AsyncMock:
    stub = AsyncMock(spec=TransactionSubmitter)
    stub.sign_and_broadcast.return_value = "stub-signature"
    return stub


@pytest.fixture
def executor(users, vault, swap_provider, submitter) -> TradeExecutor:
    return TradeExecutor(
        users=users,
        vault=vault,
        swap_provider=swap_provider,
        submitter=submitter,
    )

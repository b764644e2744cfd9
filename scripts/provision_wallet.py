#!/usr/bin/env python3
"""Create a new custodied Solana wallet for a Telegram user.

The secret key is encrypted with ENCRYPTION_KEY before it is stored; only
the public key is printed.

Usage:
    python scripts/provision_wallet.py <telegram_id> [--label NAME] [--activate]
"""

import argparse
import asyncio
import sys

from solders.keypair import Keypair

from tradeapi.config import load_settings
from tradeapi.crypto import CredentialVault
from tradeapi.errors import ConfigError
from tradeapi.signing.keys import secret_from_keypair
from tradeapi.store.database import close_mongodb_connection, connect_to_mongodb
from tradeapi.store.models import Wallet
from tradeapi.store.repository import UserRepository


async def provision_wallet(telegram_id: str, label: str, activate: bool) -> str:
    settings = load_settings()
    vault = CredentialVault(settings.encryption_key_bytes)

    keypair = Keypair()
    wallet = Wallet(
        label=label,
        public_key=str(keypair.pubkey()),
        secret_key=vault.encrypt(secret_from_keypair(keypair)),
    )

    database = await connect_to_mongodb(settings.mongodb_uri)
    try:
        repo = UserRepository(database)
        await repo.ensure_indexes()
        await repo.get_or_create_user(telegram_id)
        user = await repo.add_wallet(telegram_id, wallet)
        if activate:
            await repo.set_active_wallet(telegram_id, len(user.wallets) - 1)
    finally:
        await close_mongodb_connection()

    return wallet.public_key


def main():
    parser = argparse.ArgumentParser(description="Provision a custodied Solana wallet")
    parser.add_argument("telegram_id", help="Telegram user ID")
    parser.add_argument("--label", default="Unnamed Wallet", help="Wallet label")
    parser.add_argument(
        "--activate", action="store_true", help="Make the new wallet the active one"
    )
    args = parser.parse_args()

    try:
        public_key = asyncio.run(provision_wallet(args.telegram_id, args.label, args.activate))
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Wallet created for user {args.telegram_id}")
    print(f"Public key: {public_key}")


if __name__ == "__main__":
    main()

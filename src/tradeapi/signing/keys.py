"""Wallet keypair reconstruction."""

import base58
from solders.keypair import Keypair

from tradeapi.errors import CryptoError


def keypair_from_secret(secret: str) -> Keypair:
    """Rebuild a signing keypair from a base58-encoded 64-byte secret key.

    Raises:
        CryptoError: If the secret is not valid base58 or not a valid keypair
    """
    try:
        raw = base58.b58decode(secret.strip())
    except ValueError:
        raise CryptoError("Wallet secret is not valid base58")

    try:
        return Keypair.from_bytes(raw)
    except Exception:
        raise CryptoError("Wallet secret is not a valid keypair")


def secret_from_keypair(keypair: Keypair) -> str:
    """Encode a keypair's 64-byte secret as base58 for storage."""
    return base58.b58encode(bytes(keypair)).decode("ascii")

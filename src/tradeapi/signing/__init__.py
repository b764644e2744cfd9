"""Keypair reconstruction and transaction submission."""

from tradeapi.signing.base import TransactionSubmitter
from tradeapi.signing.keys import keypair_from_secret, secret_from_keypair
from tradeapi.signing.solana import SolanaSubmitter, partial_sign

__all__ = [
    "SolanaSubmitter",
    "TransactionSubmitter",
    "keypair_from_secret",
    "partial_sign",
    "secret_from_keypair",
]

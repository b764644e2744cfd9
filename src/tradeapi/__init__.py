"""Custodial Solana swap backend for a Telegram trading bot."""

__version__ = "0.1.0"

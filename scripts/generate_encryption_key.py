#!/usr/bin/env python3
"""Generate a wallet encryption key.

Usage:
    python scripts/generate_encryption_key.py
"""

from tradeapi.crypto import generate_encryption_key


if __name__ == "__main__":
    key = generate_encryption_key()
    print("Generated encryption key:")
    print(key)
    print()
    print("Add to .env file:")
    print(f"ENCRYPTION_KEY={key}")

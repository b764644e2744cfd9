"""Cryptographic utilities for secure key storage.

Wallet secrets are encrypted with AES-256-CBC and PKCS7 padding. Each value
carries its own random IV and is stored as ``base64(iv):base64(ciphertext)``.
"""

import base64
import binascii
import logging
import os
import secrets
from typing import Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from tradeapi.errors import ConfigError, CryptoError, FormatError

logger = logging.getLogger(__name__)

KEY_SIZE = 32
IV_SIZE = 16
BLOCK_SIZE_BITS = algorithms.AES.block_size


def generate_encryption_key() -> str:
    """Generate a new wallet encryption key.

    Returns:
        Hex-encoded 32-byte key suitable for ENCRYPTION_KEY
    """
    return secrets.token_bytes(KEY_SIZE).hex()


def _b64decode(part: str, what: str) -> bytes:
    try:
        return base64.b64decode(part, validate=True)
    except (binascii.Error, ValueError):
        raise FormatError(f"Invalid encrypted text format: {what} is not base64")


class CredentialVault:
    """Encrypts and decrypts wallet secret keys.

    Usage:
        vault = CredentialVault.from_hex(settings.encryption_key)
        encrypted = vault.encrypt(secret)
        secret = vault.decrypt(encrypted)
    """

    def __init__(self, key: bytes):
        """Initialize with the process-wide encryption key.

        Args:
            key: Raw 32-byte AES key

        Raises:
            ConfigError: If the key is not exactly 32 bytes
        """
        if len(key) != KEY_SIZE:
            raise ConfigError("ENCRYPTION_KEY must be 32 bytes in hex")
        self._key = key

    @classmethod
    def from_hex(cls, hex_key: str) -> "CredentialVault":
        try:
            key = bytes.fromhex(hex_key)
        except ValueError:
            raise ConfigError("ENCRYPTION_KEY must be hex encoded")
        return cls(key)

    def _cipher(self, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.CBC(iv))

    def encrypt(self, plaintext: Union[bytes, str]) -> str:
        """Encrypt a secret with a fresh IV.

        Args:
            plaintext: Secret bytes (str is encoded as UTF-8)

        Returns:
            ``base64(iv):base64(ciphertext)``
        """
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")

        iv = os.urandom(IV_SIZE)
        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = self._cipher(iv).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return (
            base64.b64encode(iv).decode("ascii")
            + ":"
            + base64.b64encode(ciphertext).decode("ascii")
        )

    def decrypt(self, encoded: str) -> bytes:
        """Decrypt an encoded secret.

        Args:
            encoded: ``base64(iv):base64(ciphertext)``

        Returns:
            Decrypted secret bytes

        Raises:
            FormatError: If the value is not two base64 parts of valid sizes
            CryptoError: If the padding check fails (wrong key or tampered data)
        """
        parts = encoded.split(":")
        if len(parts) != 2:
            raise FormatError("Invalid encrypted text format")

        iv = _b64decode(parts[0], "iv")
        ciphertext = _b64decode(parts[1], "ciphertext")

        if len(iv) != IV_SIZE:
            raise FormatError("Invalid encrypted text format: bad iv length")
        if not ciphertext or len(ciphertext) % (BLOCK_SIZE_BITS // 8):
            raise FormatError("Invalid encrypted text format: truncated ciphertext")

        decryptor = self._cipher(iv).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
        try:
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError:
            # Bad padding means wrong key or corrupted data
            raise CryptoError("Failed to decrypt secret: bad key or corrupted data")

    def decrypt_text(self, encoded: str) -> str:
        """Decrypt a secret that was stored as UTF-8 text."""
        try:
            return self.decrypt(encoded).decode("utf-8")
        except UnicodeDecodeError:
            raise CryptoError("Failed to decrypt secret: result is not text")

"""Error kinds raised along the trade pipeline.

Every per-request error carries the HTTP status the API layer responds with.
"""


class TradeAPIError(Exception):
    """Base class for all service errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(TradeAPIError):
    """Missing or malformed process configuration. Fatal at startup."""


class AuthError(TradeAPIError):
    """Request did not carry the shared API key."""

    status_code = 401


class ValidationError(TradeAPIError):
    """Request is missing a required field."""

    status_code = 400


class NotFoundError(TradeAPIError):
    """Unknown user, or user has no usable wallet."""

    status_code = 400


class FormatError(TradeAPIError):
    """Stored secret is not in iv:ciphertext form."""


class CryptoError(TradeAPIError):
    """Stored secret could not be decrypted or decoded."""


class IntegrityError(TradeAPIError):
    """Decrypted keypair does not match the stored public key."""


class QuoteError(TradeAPIError):
    """Aggregator quote failed or returned no routes."""


class SwapBuildError(TradeAPIError):
    """Aggregator did not return a usable swap transaction."""


class SigningError(TradeAPIError):
    """Wallet keypair could not sign the swap transaction."""


class BroadcastError(TradeAPIError):
    """Network rejected the signed transaction."""


class ConfirmError(TradeAPIError):
    """Transaction did not reach the requested commitment."""

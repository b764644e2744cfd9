"""Application configuration using pydantic-settings.

Key material (API key, wallet encryption key) is validated once at startup.
The process refuses to serve when either is missing or malformed.
"""

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tradeapi.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ======================
    # Server
    # ======================
    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=3001, description="API server port")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ======================
    # Database
    # ======================
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/solana-bot",
        description="MongoDB connection string",
    )

    # ======================
    # Chain / Aggregator
    # ======================
    solana_rpc_url: str = Field(
        default="https://api.devnet.solana.com", description="Solana RPC URL"
    )
    jupiter_api_url: str = Field(
        default="https://quote-api.jup.ag/v1", description="Jupiter quote API base URL"
    )
    http_timeout: float = Field(default=30.0, description="Aggregator HTTP timeout (seconds)")

    # ======================
    # Secrets
    # ======================
    api_key: str = Field(..., min_length=1, description="Shared secret for the x-api-key header")
    encryption_key: str = Field(
        ..., description="Hex-encoded 32-byte AES key for wallet secrets"
    )

    @field_validator("encryption_key")
    @classmethod
    def validate_encryption_key(cls, v: str) -> str:
        """Encryption key must be hex decoding to exactly 32 bytes."""
        try:
            raw = bytes.fromhex(v)
        except ValueError:
            raise ValueError("ENCRYPTION_KEY must be hex encoded")
        if len(raw) != 32:
            raise ValueError("ENCRYPTION_KEY must be 32 bytes in hex")
        return v

    @property
    def encryption_key_bytes(self) -> bytes:
        return bytes.fromhex(self.encryption_key)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "mongodb_uri": self._redact_url(self.mongodb_uri),
            "solana_rpc_url": self.solana_rpc_url,
            "jupiter_api_url": self.jupiter_api_url,
            "api_key": "***",
            "encryption_key": "***",
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials in a connection URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            creds, host = rest.rsplit("@", 1)
            if ":" in creds:
                user, _ = creds.split(":", 1)
                return f"{proto}://{user}:***@{host}"
        return url


def load_settings(**overrides) -> Settings:
    """Build settings, converting validation failures into ConfigError."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()

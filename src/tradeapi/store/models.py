"""Document models for the users collection.

Field aliases match the stored camelCase document shape.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TradeSettings(BaseModel):
    """Default slippage and amount for one trade direction."""

    model_config = ConfigDict(populate_by_name=True)

    slippage: float = Field(default=0.5, description="Slippage tolerance in percent")
    trade_amount: float = Field(
        default=0.1, alias="tradeAmount", description="Trade amount in SOL"
    )


class UserSettings(BaseModel):
    """Per-direction trading defaults."""

    buy: TradeSettings = Field(default_factory=TradeSettings)
    sell: TradeSettings = Field(default_factory=TradeSettings)


class Wallet(BaseModel):
    """A custodied wallet. ``secret_key`` is always the encrypted form."""

    model_config = ConfigDict(populate_by_name=True)

    label: str = Field(default="Unnamed Wallet")
    public_key: str = Field(..., alias="publicKey")
    secret_key: str = Field(..., alias="secretKey", repr=False)


class User(BaseModel):
    """Telegram user with custodied wallets."""

    model_config = ConfigDict(populate_by_name=True)

    telegram_id: str = Field(..., alias="telegramId")
    wallets: list[Wallet] = Field(default_factory=list)
    active_wallet_index: int = Field(default=0, alias="activeWalletIndex")
    settings: UserSettings = Field(default_factory=UserSettings)

    @property
    def active_wallet(self) -> Optional[Wallet]:
        """Wallet selected by ``active_wallet_index``, or None if out of range."""
        if 0 <= self.active_wallet_index < len(self.wallets):
            return self.wallets[self.active_wallet_index]
        return None

    def to_document(self) -> dict:
        """Serialize to the stored document shape."""
        return self.model_dump(by_alias=True)

"""Request and response contracts for the trade endpoints.

Every field is optional at the schema level; presence is enforced by the
trade executor so missing fields get the same error as falsy ones.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TradeRequest(BaseModel):
    """Swap request sent by the bot front end."""

    model_config = ConfigDict(populate_by_name=True)

    telegram_id: Optional[str] = Field(None, alias="telegramId", description="User's Telegram ID")
    trade_amount: Optional[float] = Field(
        None, alias="tradeAmount", description="Amount in SOL (human units)"
    )
    slippage: Optional[float] = Field(None, description="Slippage tolerance in percent")
    input_mint: Optional[str] = Field(None, alias="inputMint", description="Mint to swap from")
    output_mint: Optional[str] = Field(None, alias="outputMint", description="Mint to swap to")

    @field_validator("telegram_id", mode="before")
    @classmethod
    def coerce_telegram_id(cls, v: Any) -> Any:
        """Telegram IDs arrive as numbers from some clients."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class TradeResponse(BaseModel):
    """Successful swap."""

    success: bool = True
    signature: str = Field(..., description="Confirmed transaction signature")


class ErrorResponse(BaseModel):
    """Error body returned for every failure."""

    error: str

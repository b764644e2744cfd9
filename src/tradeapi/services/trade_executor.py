"""Custodial swap execution.

Pipeline for one trade, each step a precondition for the next:
1. Validate request fields
2. Load user and active wallet
3. Decrypt wallet secret and rebuild keypair
4. Verify keypair matches the stored public key
5. Convert amount to base units
6. Get unsigned swap transaction from the aggregator
7. Sign and broadcast
8. Wait for ``confirmed`` commitment

Buy and sell run the same pipeline; the caller decides which mint is in/out.
"""

import base64
import binascii
import logging
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from tradeapi.crypto import CredentialVault
from tradeapi.errors import IntegrityError, NotFoundError, SwapBuildError, ValidationError
from tradeapi.routing.base import SwapProvider
from tradeapi.signing.base import TransactionSubmitter
from tradeapi.signing.keys import keypair_from_secret
from tradeapi.store.repository import UserRepository

logger = logging.getLogger(__name__)

# Lamports per SOL
SOL_DECIMALS = 9

Number = Union[int, float, Decimal, str]


class TradeSide(str, Enum):
    """Direction of a trade."""

    BUY = "buy"
    SELL = "sell"


def to_base_units(amount: Number, decimals: int = SOL_DECIMALS) -> int:
    """Convert a human-unit amount to integer base units.

    Fractions beyond ``decimals`` are truncated toward zero, never rounded.
    Floats go through their shortest repr so 0.1 converts to exactly
    100000000 lamports.
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValidationError(f"Invalid trade amount: {amount}")
    if not value.is_finite():
        raise ValidationError(f"Invalid trade amount: {amount}")
    scaled = value.scaleb(decimals).to_integral_value(rounding=ROUND_DOWN)
    return int(scaled)


class TradeExecutor:
    """Runs custodial swaps for Telegram users."""

    def __init__(
        self,
        users: UserRepository,
        vault: CredentialVault,
        swap_provider: SwapProvider,
        submitter: TransactionSubmitter,
    ):
        self.users = users
        self.vault = vault
        self.swap_provider = swap_provider
        self.submitter = submitter

    async def execute(
        self,
        side: TradeSide,
        telegram_id: Optional[str],
        trade_amount: Optional[Number],
        slippage: Optional[float],
        input_mint: Optional[str],
        output_mint: Optional[str],
    ) -> str:
        """Execute a swap from the user's active wallet.

        Returns:
            Confirmed transaction signature

        Raises:
            ValidationError: If any required field is missing or falsy
            NotFoundError: If the user is unknown or has no usable wallet
            FormatError, CryptoError: If the stored secret cannot be decrypted
            IntegrityError: If the decrypted key does not match the wallet
            QuoteError, SwapBuildError: If the aggregator fails
            SigningError, BroadcastError, ConfirmError: If submission fails
        """
        # Presence only: sign and magnitude of amount and slippage are left to the aggregator
        if not all([telegram_id, trade_amount, slippage, input_mint, output_mint]):
            raise ValidationError("Missing required fields.")

        user = await self.users.get_user_by_telegram_id(str(telegram_id))
        if user is None or not user.wallets:
            raise NotFoundError("User not found or no wallets available.")

        wallet = user.active_wallet
        if wallet is None:
            raise NotFoundError("User not found or no wallets available.")

        secret = self.vault.decrypt_text(wallet.secret_key)
        keypair = keypair_from_secret(secret)

        if str(keypair.pubkey()) != wallet.public_key:
            logger.error(
                f"Public key mismatch for user {user.telegram_id}: "
                f"stored {wallet.public_key}, decrypted {keypair.pubkey()}"
            )
            raise IntegrityError("Wallet decryption error: public key mismatch.")

        amount = to_base_units(trade_amount)
        logger.info(
            f"Executing {side.value}: user={user.telegram_id} wallet={wallet.public_key} "
            f"{input_mint} -> {output_mint} amount={amount} slippage={slippage}%"
        )

        swap_tx_base64 = await self.swap_provider.get_swap_transaction(
            wallet.public_key,
            input_mint,
            output_mint,
            amount,
            slippage,
        )

        try:
            swap_tx = base64.b64decode(swap_tx_base64, validate=True)
        except (binascii.Error, ValueError):
            raise SwapBuildError("Swap transaction is not valid base64.")

        signature = await self.submitter.sign_and_broadcast(swap_tx, keypair)
        logger.info(f"{side.value} confirmed for user {user.telegram_id}: {signature}")
        return signature

"""Abstract interface for swap transaction providers."""

from abc import ABC, abstractmethod


class SwapProvider(ABC):
    """Builds unsigned swap transactions for a payer wallet."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        pass

    @abstractmethod
    async def get_swap_transaction(
        self,
        payer_public_key: str,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage: float,
    ) -> str:
        """
        Get an unsigned swap transaction.

        Args:
            payer_public_key: Wallet address paying for and signing the swap
            input_mint: Mint address of the token to swap from
            output_mint: Mint address of the token to swap to
            amount: Input amount in base units
            slippage: Acceptable slippage in percent (0.5 = 0.5%)

        Returns:
            Base64-encoded unsigned transaction
        """
        pass

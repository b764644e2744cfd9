"""Jupiter DEX aggregator integration for Solana.

Two calls per swap: a quote for the mint pair, then a swap build for the
first returned route.
"""

import logging
from typing import Optional

import httpx

from tradeapi.errors import QuoteError, SwapBuildError
from tradeapi.routing.base import SwapProvider

logger = logging.getLogger(__name__)

JUPITER_API_V1 = "https://quote-api.jup.ag/v1"

# Token mint addresses on Solana mainnet
SOL_MINT = "So11111111111111111111111111111111111111112"  # Wrapped SOL
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def _json_body(response: httpx.Response, error: type) -> dict:
    """Decode a JSON object body or raise the given error."""
    try:
        data = response.json()
    except ValueError:
        raise error("Jupiter returned a non-JSON response.")
    if not isinstance(data, dict):
        raise error("Jupiter returned an unexpected response.")
    return data


class JupiterClient(SwapProvider):
    """Jupiter aggregator client.

    The route order returned by Jupiter is trusted as-is; the first route is
    always used.
    """

    def __init__(
        self,
        base_url: str = JUPITER_API_V1,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return "Jupiter"

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage: float,
    ) -> dict:
        """Get the first swap route for a mint pair.

        Raises:
            QuoteError: If the request fails or no routes are returned
        """
        try:
            response = await self._client.get(
                f"{self.base_url}/quote",
                headers={"Accept": "application/json"},
                params={
                    "inputMint": input_mint,
                    "outputMint": output_mint,
                    "amount": str(amount),
                    "slippage": str(slippage),
                    "onlyDirectRoutes": "false",
                },
            )
        except httpx.HTTPError as e:
            raise QuoteError(f"Jupiter quote API error: {e}") from e

        if not response.is_success:
            logger.warning(f"Jupiter quote error: {response.status_code} - {response.text}")
            raise QuoteError(f"Jupiter quote API error: {response.reason_phrase}")

        routes = _json_body(response, QuoteError).get("routes") or []
        if not routes:
            raise QuoteError("No swap routes found from Jupiter.")

        logger.debug(f"Jupiter returned {len(routes)} routes for {input_mint} -> {output_mint}")
        return routes[0]

    async def build_swap(self, route: dict, payer_public_key: str) -> str:
        """Build an unsigned swap transaction for a route.

        Raises:
            SwapBuildError: If the request fails or no transaction is returned
        """
        try:
            response = await self._client.post(
                f"{self.base_url}/swap",
                json={
                    "route": route,
                    "userPublicKey": payer_public_key,
                },
            )
        except httpx.HTTPError as e:
            raise SwapBuildError(f"Jupiter swap API error: {e}") from e

        if not response.is_success:
            logger.warning(f"Jupiter swap error: {response.status_code} - {response.text}")
            raise SwapBuildError(f"Jupiter swap API error: {response.reason_phrase}")

        swap_tx = _json_body(response, SwapBuildError).get("swapTransaction")
        if not swap_tx:
            raise SwapBuildError("Failed to obtain swap transaction from Jupiter.")

        return swap_tx

    async def get_swap_transaction(
        self,
        payer_public_key: str,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage: float,
    ) -> str:
        route = await self.get_quote(input_mint, output_mint, amount, slippage)
        return await self.build_swap(route, payer_public_key)

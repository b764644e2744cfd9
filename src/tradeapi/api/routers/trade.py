"""Trade endpoints (API-key protected)."""

import logging

from fastapi import APIRouter, Depends, Request

from tradeapi.api.contracts import ErrorResponse, TradeRequest, TradeResponse
from tradeapi.errors import TradeAPIError
from tradeapi.services.trade_executor import TradeExecutor, TradeSide

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Trade"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing fields or unknown user"},
    401: {"model": ErrorResponse, "description": "Invalid API key"},
    500: {"model": ErrorResponse, "description": "Wallet, aggregator or network failure"},
}


def get_trade_executor(request: Request) -> TradeExecutor:
    """Trade executor built at startup."""
    return request.app.state.executor


async def _run_trade(side: TradeSide, body: TradeRequest, executor: TradeExecutor) -> TradeResponse:
    try:
        signature = await executor.execute(
            side,
            telegram_id=body.telegram_id,
            trade_amount=body.trade_amount,
            slippage=body.slippage,
            input_mint=body.input_mint,
            output_mint=body.output_mint,
        )
    except TradeAPIError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in /api/{side.value}: {e}")
        raise TradeAPIError("Internal server error") from e

    return TradeResponse(signature=signature)


@router.post("/buy", response_model=TradeResponse, responses=ERROR_RESPONSES)
async def buy(
    body: TradeRequest,
    executor: TradeExecutor = Depends(get_trade_executor),
) -> TradeResponse:
    """Execute a buy swap from the user's active wallet."""
    return await _run_trade(TradeSide.BUY, body, executor)


@router.post("/sell", response_model=TradeResponse, responses=ERROR_RESPONSES)
async def sell(
    body: TradeRequest,
    executor: TradeExecutor = Depends(get_trade_executor),
) -> TradeResponse:
    """Execute a sell swap from the user's active wallet."""
    return await _run_trade(TradeSide.SELL, body, executor)

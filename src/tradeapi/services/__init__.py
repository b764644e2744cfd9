"""Business services."""

from tradeapi.services.trade_executor import TradeExecutor, TradeSide, to_base_units

__all__ = ["TradeExecutor", "TradeSide", "to_base_units"]

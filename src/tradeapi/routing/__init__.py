"""Swap routing via external aggregators."""

from tradeapi.routing.base import SwapProvider
from tradeapi.routing.jupiter import JupiterClient

__all__ = ["JupiterClient", "SwapProvider"]

"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tradeapi import __version__
from tradeapi.api.middleware import ApiKeyMiddleware
from tradeapi.config import Settings, get_settings
from tradeapi.crypto import CredentialVault
from tradeapi.errors import TradeAPIError
from tradeapi.routing.jupiter import JupiterClient
from tradeapi.services.trade_executor import TradeExecutor
from tradeapi.signing.solana import SolanaSubmitter
from tradeapi.store.database import close_mongodb_connection, connect_to_mongodb
from tradeapi.store.repository import UserRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Builds the Mongo connection, aggregator client and RPC client unless an
    executor was injected into the factory.
    """
    if app.state.executor is not None:
        yield
        return

    settings: Settings = app.state.settings

    # Startup
    database = await connect_to_mongodb(settings.mongodb_uri)
    users = UserRepository(database)
    await users.ensure_indexes()

    jupiter = JupiterClient(settings.jupiter_api_url, timeout=settings.http_timeout)
    submitter = SolanaSubmitter(settings.solana_rpc_url)
    app.state.executor = TradeExecutor(
        users=users,
        vault=CredentialVault(settings.encryption_key_bytes),
        swap_provider=jupiter,
        submitter=submitter,
    )
    logger.info(f"Trade executor ready (rpc={settings.solana_rpc_url})")

    yield

    # Shutdown
    await jupiter.aclose()
    await submitter.close()
    await close_mongodb_connection()
    app.state.executor = None


async def trade_error_handler(request: Request, exc: TradeAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"Error in {request.url.path}: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"Rejected {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Invalid body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


def create_app(
    settings: Optional[Settings] = None,
    executor: Optional[TradeExecutor] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Validated settings (loaded from the environment if None)
        executor: Prebuilt trade executor; skips resource setup when given
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Trade API",
        description="Custodial Solana swap backend for the Telegram bot",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.executor = executor

    app.add_middleware(ApiKeyMiddleware, api_key=settings.api_key)

    app.add_exception_handler(TradeAPIError, trade_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Register routes
    from tradeapi.api.routers import health, trade

    app.include_router(health.router, tags=["Health"])
    app.include_router(trade.router)

    return app

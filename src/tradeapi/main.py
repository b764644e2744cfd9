"""Main entry point - runs the trade API server."""

import logging
import sys

import uvicorn

from tradeapi.api.app import create_app
from tradeapi.config import load_settings
from tradeapi.errors import ConfigError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Quiet noisy third-party loggers
    for name in ("httpx", "httpcore", "pymongo", "motor"):
        logging.getLogger(name).setLevel(logging.WARNING)


def main():
    """Main entry point."""
    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging("INFO")
        logger.error(str(e))
        sys.exit(1)

    configure_logging("DEBUG" if settings.debug else settings.log_level)
    logger.info(f"Starting trade API on {settings.host}:{settings.port}")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()

"""Health check endpoints."""

from fastapi import APIRouter, Request

from tradeapi import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "tradeapi"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with redacted configuration."""
    return {
        "status": "healthy",
        "service": "tradeapi",
        "version": __version__,
        "config": request.app.state.settings.get_safe_dict(),
    }

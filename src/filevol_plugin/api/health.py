"""Health check endpoint."""

from fastapi import APIRouter

from filevol_plugin import __version__
from filevol_plugin.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)

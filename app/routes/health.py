"""Health check route."""

from deps import APIRouter

from baseline_guard import __version__

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Liveness check."""
    return {"status": "ok", "version": __version__}

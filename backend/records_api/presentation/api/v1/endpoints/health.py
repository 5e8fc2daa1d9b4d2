"""Health check endpoint — reports app metadata and whether storage is open."""

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Returns the current application health status."""
    settings = request.app.state.settings
    database = getattr(request.app.state, "database", None)
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": "open" if database is not None and database.is_open else "closed",
    }

"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Dict, Any
from fastapi import APIRouter

from config.settings import get_settings
from config.database import get_supabase_client_optional


SERVICE_NAME = "listing-search-api"

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
    }


@router.get("/health/detailed")
async def detailed_health_check() -> Dict[str, Any]:
    """
    Detailed health check with dependency status.

    Checks:
    - Supabase connection (one-row read of the listings table)
    - Whether remote term extraction is configured

    A missing or failing dependency reports "degraded"; search still
    answers (with local extraction or empty results).
    """
    settings = get_settings()

    supabase_status = "unknown"
    supabase_error = None
    try:
        client = get_supabase_client_optional()
        if client:
            client.table(settings.listings_table).select("id").limit(1).execute()
            supabase_status = "connected"
        else:
            supabase_status = "not_configured"
    except Exception as e:
        supabase_status = "error"
        supabase_error = str(e)

    if not settings.term_extractor_enabled:
        extractor_status = "disabled"
    elif settings.openai_api_key:
        extractor_status = "configured"
    else:
        extractor_status = "not_configured"

    return {
        "status": "healthy" if supabase_status == "connected" else "degraded",
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "supabase": {
                "status": supabase_status,
                "error": supabase_error,
            },
            "term_extractor": {
                "status": extractor_status,
                "model": settings.term_extractor_model,
            },
        },
    }


@router.get("/ready")
async def readiness_check() -> Dict[str, str]:
    """
    Kubernetes-style readiness check.

    Returns 200 if the service is ready to accept traffic.
    """
    client = get_supabase_client_optional()
    if client is None:
        return {"status": "not_ready", "reason": "database_not_configured"}

    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """Kubernetes-style liveness check."""
    return {"status": "alive"}

"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...health import check_liveness, perform_health_check

router = APIRouter(tags=["Health"])


@router.get("/health")
def health():
    """Aggregated health report; 503 when any check is unhealthy."""
    report = perform_health_check()
    status_code = 200 if report["status"] == "healthy" else 503
    return JSONResponse(status_code=status_code, content=report)


@router.get("/health/live")
def liveness():
    return check_liveness()

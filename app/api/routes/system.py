from fastapi import APIRouter, Request

from api.dependencies.rate_limits import HEALTHCHECK_LIMIT, get_limiter
from infrastructure.services import SettingsDep

router = APIRouter(tags=["System"])
limiter = get_limiter()


# Load balancer and uptime probes poll these every few seconds.
@router.get("/version")
@limiter.limit(HEALTHCHECK_LIMIT)
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit(HEALTHCHECK_LIMIT)
def get_health(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Healthcheck endpoint."""
    return {
        "status": "ok",
        "configured": settings.org_directory.is_configured,
    }

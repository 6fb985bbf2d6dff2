"""Health Routes — process liveness and dependency readiness.

Invariants:
    - GET /health/ answers OK whenever the process can serve a request
    - GET /health/ready answers OK only when every dependency check is "up";
      otherwise 503 with code NOT_READY and the failing checks named
    - Both answers use the same envelope as the rest of the API

Design Decisions:
    - Checks are a name → state map so a new dependency is one more entry
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from forms_api.core import envelope

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "forms-api"


@router.get("/")
async def liveness(request: Request):
    return envelope.ok(service=SERVICE_NAME, version=request.app.version)


async def _database_state(request: Request) -> str:
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        return "missing"
    return "up" if await manager.health_check() else "down"


@router.get("/ready")
async def readiness(request: Request):
    """OK with the check map, or 503 naming each check that is not up."""
    checks = {"database": await _database_state(request)}
    failing = [name for name, state in checks.items() if state != "up"]
    if not failing:
        return envelope.ok(checks=checks)

    logger.warning("service not ready", extra={"detail": checks})
    body = envelope.error(
        [f"{name} is {checks[name]}" for name in failing], "NOT_READY",
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={**body, "checks": checks},
    )

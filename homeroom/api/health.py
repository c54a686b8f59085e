"""Service status: store reachability and record counts."""

import logging

from fastapi import APIRouter

from homeroom.api.auth import TokenServiceDep
from homeroom.api.deps import AssignmentStoreDep, CredentialStoreDep
from homeroom.core.config import get_settings
from homeroom.core.exceptions import StorageUnavailableError
from homeroom.schemas.health import HealthResponse, StoreCounts

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=HealthResponse, response_model_exclude_none=True)
def get_health(
    users: CredentialStoreDep,
    assignments: AssignmentStoreDep,
    tokens: TokenServiceDep,
) -> HealthResponse:
    """Public. Always 200; a storage outage is reported as status "degraded"."""
    environment = get_settings().APP_ENV
    try:
        counts = StoreCounts(
            teachers=users.count_users(is_admin=True),
            students=users.count_users(is_admin=False),
            assignments=assignments.count(),
        )
    except StorageUnavailableError:
        logger.warning("Health check: storage unavailable")
        return HealthResponse(
            status="degraded",
            environment=environment,
            storage="unavailable",
            token_lifetime_minutes=tokens.expire_minutes,
        )
    return HealthResponse(
        status="ok",
        environment=environment,
        storage="available",
        counts=counts,
        token_lifetime_minutes=tokens.expire_minutes,
    )

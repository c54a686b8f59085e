"""API routes."""

from fastapi import APIRouter

from homeroom.api import assignments, auth, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(assignments.router, prefix="/assignments", tags=["assignments"])

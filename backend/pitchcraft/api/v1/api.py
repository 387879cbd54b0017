"""API v1: aggregates all routers under a single prefix."""

from fastapi import APIRouter

from pitchcraft.api.v1.routers import auth, pitches

router = APIRouter()
router.include_router(auth.router)
router.include_router(pitches.router)

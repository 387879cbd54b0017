"""Pitches router: dashboard, create and detail views."""

import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.api.deps import get_db, get_session
from pitchcraft.controllers import dashboard_controller, intake_controller
from pitchcraft.schemas.auth import SessionContext
from pitchcraft.schemas.pitch import (
    INDUSTRIES,
    TONE_LABELS,
    DashboardRead,
    IdeaInput,
    IntakeOptions,
    PitchCreated,
    PitchRead,
)

router = APIRouter(prefix="/pitches", tags=["pitches"])


@router.get("/", response_model=DashboardRead)
async def list_pitches(
    session: SessionContext = Depends(get_session),
    db: AsyncSession = Depends(get_db),
):
    """List the current user's pitches, newest first."""
    return await dashboard_controller.get_dashboard(session, db)


@router.post("/", response_model=PitchCreated, status_code=status.HTTP_201_CREATED)
async def create_pitch(
    payload: IdeaInput,
    session: SessionContext = Depends(get_session),
    db: AsyncSession = Depends(get_db),
):
    """Generate a pitch from an idea and save it."""
    return await intake_controller.run_intake(session, payload, db)


@router.get("/options", response_model=IntakeOptions)
async def get_options(session: SessionContext = Depends(get_session)):
    """Choices for the create form."""
    return IntakeOptions(
        industries=list(INDUSTRIES),
        tones=TONE_LABELS,
        min_description_length=intake_controller.MIN_DESCRIPTION_LENGTH,
    )


@router.get("/{pitch_id}", response_model=PitchRead)
async def get_pitch(
    pitch_id: uuid.UUID,
    session: SessionContext = Depends(get_session),
    db: AsyncSession = Depends(get_db),
):
    """Get a single saved pitch."""
    return await dashboard_controller.get_pitch(session, pitch_id, db)

"""Dashboard (list) and detail views over the pitch store."""

import datetime
import logging
import uuid

from fastapi import HTTPException
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.core.exceptions import PersistenceError
from pitchcraft.db.pitch_store import get_pitch_by_id, get_pitches_by_user
from pitchcraft.models.pitch import Pitch
from pitchcraft.schemas.auth import SessionContext
from pitchcraft.schemas.pitch import DashboardRead, DashboardState, PitchSummary

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No pitches found! Create your first AI-generated pitch to get started."
UNTITLED = "Untitled Pitch"


def format_date(value: datetime.datetime | None) -> str:
    """``Mar 5, 2025`` style label, ``N/A`` when there is no date."""
    if value is None:
        return "N/A"
    return f"{value:%b} {value.day}, {value.year}"


def summarize(pitch: Pitch) -> PitchSummary:
    return PitchSummary(
        id=pitch.id,
        pitch_name=pitch.pitch_name or UNTITLED,
        tagline=pitch.tagline,
        tone=pitch.tone,
        created_at=pitch.created_at,
        created_label=format_date(pitch.created_at),
    )


class DashboardView:
    """LOADING → LOADED | ERRORED for one user's pitch list."""

    def __init__(self, session: SessionContext):
        self.session = session
        self.state = DashboardState.loading
        self.pitches: list[Pitch] = []
        self.error: str | None = None

    async def load(self, db: AsyncSession) -> DashboardState:
        self.state = DashboardState.loading
        try:
            self.pitches = await get_pitches_by_user(self.session.uid, db)
        except PersistenceError as e:
            self.state = DashboardState.errored
            self.error = e.message
            self.pitches = []
            return self.state

        self.state = DashboardState.loaded
        self.error = None
        return self.state

    def read(self) -> DashboardRead:
        return DashboardRead(
            state=self.state,
            count=len(self.pitches),
            pitches=[summarize(p) for p in self.pitches],
            empty_message=EMPTY_MESSAGE if self.state == DashboardState.loaded and not self.pitches else None,
        )


async def get_dashboard(session: SessionContext, db: AsyncSession) -> DashboardRead:
    view = DashboardView(session)
    if await view.load(db) == DashboardState.errored:
        raise HTTPException(status_code=PersistenceError.status_code, detail=view.error)
    return view.read()


async def get_pitch(session: SessionContext, pitch_id: uuid.UUID, db: AsyncSession) -> Pitch:
    try:
        pitch = await get_pitch_by_id(pitch_id, db)
    except PersistenceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    # Pitches are never shared between users
    if not pitch or pitch.user_id != session.uid:
        raise HTTPException(status_code=404, detail="Pitch not found")
    return pitch

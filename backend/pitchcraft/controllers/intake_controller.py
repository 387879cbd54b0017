"""
Idea intake: the create-pitch flow.

``IntakeFlow`` is an explicit state machine::

    IDLE ──submit──▶ SUBMITTING ──▶ SUCCESS
      ▲                   │
      └──── retry ◀── FAILED

- a description shorter than ``MIN_DESCRIPTION_LENGTH`` keeps the flow in
  IDLE and never reaches the AI service or the database;
- generation always happens before the insert, and a failed insert does not
  undo (or keep) the generated pitch;
- a flow that is SUBMITTING refuses a second submit.

``run_intake`` drives one flow per HTTP request and translates its outcome.
"""

import logging
import uuid
from collections.abc import Awaitable, Callable
from enum import Enum

from fastapi import HTTPException
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.core.exceptions import IdeaValidationError, IntakeBusyError, PitchCraftError
from pitchcraft.core.pitch_generator import generate_pitch
from pitchcraft.db.pitch_store import save_pitch
from pitchcraft.schemas.auth import SessionContext
from pitchcraft.schemas.pitch import GeneratedPitch, IdeaInput, PitchCreated

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 20
FALLBACK_ERROR = "AI pitch generation or database saving failed. Please try again."

Generate = Callable[[IdeaInput], Awaitable[GeneratedPitch]]
Save = Callable[[uuid.UUID, IdeaInput, GeneratedPitch, AsyncSession], Awaitable[uuid.UUID]]


class IntakeState(str, Enum):
    idle = "idle"
    submitting = "submitting"
    success = "success"
    failed = "failed"


def check_idea(idea: IdeaInput) -> None:
    """Local precondition for submitting an idea."""
    if len(idea.description) < MIN_DESCRIPTION_LENGTH:
        raise IdeaValidationError()


class IntakeFlow:
    def __init__(self, session: SessionContext, generate: Generate, save: Save):
        self.session = session
        self._generate = generate
        self._save = save
        self.state = IntakeState.idle
        self.idea: IdeaInput | None = None
        self.error: PitchCraftError | None = None
        self.pitch_id: uuid.UUID | None = None

    @property
    def message(self) -> str | None:
        if self.error is None:
            return None
        return self.error.message or FALLBACK_ERROR

    async def submit(self, idea: IdeaInput, db: AsyncSession) -> uuid.UUID | None:
        """Run one attempt.  Returns the new pitch id on success, else ``None``."""
        if self.state == IntakeState.submitting:
            raise IntakeBusyError()

        # Retrying from FAILED (or starting over after SUCCESS) goes back to IDLE
        self.state = IntakeState.idle
        self.idea = idea
        self.error = None
        self.pitch_id = None

        try:
            check_idea(idea)
        except IdeaValidationError as e:
            self.error = e
            return None

        self.state = IntakeState.submitting
        try:
            generated = await self._generate(idea)
            pitch_id = await self._save(self.session.uid, idea, generated, db)
        except PitchCraftError as e:
            logger.warning("Intake failed for user %s: %s", self.session.uid, e)
            self.state = IntakeState.failed
            self.error = e
            return None

        self.state = IntakeState.success
        self.pitch_id = pitch_id
        return pitch_id


# Users with a submission in flight; a second concurrent submit is refused.
_in_flight: set[uuid.UUID] = set()


async def run_intake(session: SessionContext, idea: IdeaInput, db: AsyncSession) -> PitchCreated:
    if session.uid in _in_flight:
        busy = IntakeBusyError()
        raise HTTPException(status_code=busy.status_code, detail=busy.message)

    flow = IntakeFlow(session, generate=generate_pitch, save=save_pitch)
    _in_flight.add(session.uid)
    try:
        pitch_id = await flow.submit(idea, db)
    finally:
        _in_flight.discard(session.uid)

    if pitch_id is None:
        raise HTTPException(status_code=flow.error.status_code, detail=flow.message)
    return PitchCreated(id=pitch_id, state=flow.state.value)

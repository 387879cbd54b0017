"""
Pitch store: the ``pitches`` collection.

Three operations only: insert, point lookup and the per-user listing.  Any
database failure surfaces as ``PersistenceError``; a missing record is a
``None``/empty result, not an error.
"""

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.core.config import settings
from pitchcraft.core.exceptions import PersistenceError
from pitchcraft.models.base import utc_now
from pitchcraft.models.pitch import Pitch
from pitchcraft.schemas.pitch import GENERATED_FIELDS, GeneratedPitch, IdeaInput

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_pitch_record(
    user_id: uuid.UUID,
    idea: IdeaInput,
    generated: GeneratedPitch,
) -> Pitch:
    """Merge an idea and its generated pitch into one record.

    A blank idea name falls back to the name the model came up with.
    """
    return Pitch(
        user_id=user_id,
        idea_name=idea.idea_name if idea.idea_name.strip() else generated.pitch_name,
        description=idea.description,
        industry=idea.industry,
        tone=idea.tone,
        **{name: getattr(generated, name) for name in GENERATED_FIELDS},
        created_at=utc_now(),
    )


async def _read_with_retries(
    read: Callable[[], Awaitable[T]],
    message: str,
    db: AsyncSession,
) -> T:
    attempts = settings.DB_READ_RETRIES + 1
    for attempt in range(1, attempts + 1):
        try:
            return await read()
        except SQLAlchemyError as e:
            logger.warning("Pitch read failed (attempt %d/%d): %s", attempt, attempts, e)
            if attempt == attempts:
                raise PersistenceError(message) from e
            await db.rollback()
            await asyncio.sleep(settings.DB_READ_RETRY_DELAY)


async def save_pitch(
    user_id: uuid.UUID,
    idea: IdeaInput,
    generated: GeneratedPitch,
    db: AsyncSession,
) -> uuid.UUID:
    """Insert the merged record and return its id."""
    record = build_pitch_record(user_id, idea, generated)
    try:
        db.add(record)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Error adding pitch for user %s: %s", user_id, e, exc_info=True)
        raise PersistenceError("Could not save the pitch to the database.") from e

    logger.info("Saved pitch %s for user %s", record.id, user_id)
    return record.id


async def get_pitch_by_id(pitch_id: uuid.UUID, db: AsyncSession) -> Pitch | None:
    return await _read_with_retries(
        lambda: db.get(Pitch, pitch_id),
        "Could not retrieve the pitch details.",
        db,
    )


async def get_pitches_by_user(user_id: uuid.UUID, db: AsyncSession) -> list[Pitch]:
    """Every pitch owned by *user_id*, newest first."""

    async def _query() -> list[Pitch]:
        result = await db.execute(
            select(Pitch)
            .where(Pitch.user_id == user_id)
            .order_by(Pitch.created_at.desc())
        )
        return list(result.scalars().all())

    return await _read_with_retries(_query, "Could not load your saved pitches.", db)

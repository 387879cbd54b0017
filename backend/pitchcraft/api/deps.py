"""
Request dependencies shared by the routers.

Routers take ``get_db`` and ``get_session`` from here rather than from
``core.security`` or ``db.database``.
"""

from uuid import UUID

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.controllers.auth_controller import session_for
from pitchcraft.core.config import ModeEnum, settings
from pitchcraft.core.security import ACCESS_COOKIE
from pitchcraft.core.security import get_current_user as _user_from_cookie
from pitchcraft.db.database import get_db as _get_db
from pitchcraft.models.user import User
from pitchcraft.schemas.auth import SessionContext

__all__ = ["get_db", "get_current_user", "get_session"]

# Fixed so the dev user's pitches survive restarts
DEV_USER_ID = UUID("00000000-0000-0000-0000-000000000001")
DEV_USER_EMAIL = "dev@localhost.test"


async def get_db() -> AsyncSession:
    async for session in _get_db():
        yield session


async def _dev_user(db: AsyncSession) -> User:
    user = await db.get(User, DEV_USER_ID)
    if user is None:
        user = User(id=DEV_USER_ID, email=DEV_USER_EMAIL)
        db.add(user)
        await db.flush()
    return user


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    The signed-in user. In development mode a request without a cookie runs
    as a fixed dev user so the API can be tried without signing up.
    """
    if settings.MODE == ModeEnum.development and ACCESS_COOKIE not in request.cookies:
        return await _dev_user(db)
    return await _user_from_cookie(request, db)


async def get_session(user: User = Depends(get_current_user)) -> SessionContext:
    """The signed-in user as the session handed to controllers."""
    return session_for(user)

"""Sign-up, sign-in and session cookies for PitchCraft users."""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, Response
from sqlalchemy import func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.core.config import ModeEnum, settings
from pitchcraft.core.exceptions import AuthError
from pitchcraft.core.security import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    create_access_token,
    create_refresh_token,
    hash_password,
    hash_token,
    unauthorized,
    verify_password,
)
from pitchcraft.models.refresh_token import RefreshToken
from pitchcraft.models.user import User
from pitchcraft.schemas.auth import SessionContext

logger = logging.getLogger(__name__)


def _set_session_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    cookies = (
        (ACCESS_COOKIE, access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60),
        (REFRESH_COOKIE, refresh_token, settings.REFRESH_TOKEN_EXPIRE_DAYS * 86400),
    )
    for key, value, max_age in cookies:
        response.set_cookie(
            key=key,
            value=value,
            max_age=max_age,
            httponly=True,
            # Plain-HTTP clients (local dev, tests) would drop a Secure cookie
            secure=settings.MODE == ModeEnum.production,
            samesite="lax",
            path="/",
        )


def _clear_session_cookies(response: Response) -> None:
    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(key, path="/")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def session_for(user: User) -> SessionContext:
    return SessionContext(uid=user.id, email=user.email)


async def _find_user(email: str, db: AsyncSession) -> User | None:
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalar_one_or_none()


async def _find_refresh_token(raw_token: str, db: AsyncSession) -> RefreshToken | None:
    result = await db.execute(
        select(RefreshToken).where(RefreshToken.token_hash == hash_token(raw_token))
    )
    return result.scalar_one_or_none()


async def handle_signup(email: str, password: str, db: AsyncSession) -> User:
    """Create an account.

    A taken email raises the same ``AuthError`` as a bad login, so the
    endpoint does not tell anyone which addresses are registered.
    """
    if await _find_user(email, db):
        logger.info("Signup rejected: email already registered")
        raise AuthError()

    user = User(email=email.lower(), hashed_password=hash_password(password))
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Created user %s", user.id)
    return user


async def handle_login(email: str, password: str, db: AsyncSession) -> User:
    user = await _find_user(email, db)
    valid = (
        user is not None
        and user.is_active
        and user.hashed_password is not None
        and verify_password(password, user.hashed_password)
    )
    if not valid:
        raise AuthError()
    return user


async def start_session(user: User, response: Response, db: AsyncSession) -> SessionContext:
    """Issue a fresh token pair as cookies."""
    refresh_token = await create_refresh_token(user.id, db)
    _set_session_cookies(response, create_access_token(user.id), refresh_token)
    return session_for(user)


async def signup(email: str, password: str, response: Response, db: AsyncSession) -> SessionContext:
    try:
        user = await handle_signup(email, password, db)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return await start_session(user, response, db)


async def login(email: str, password: str, response: Response, db: AsyncSession) -> SessionContext:
    try:
        user = await handle_login(email, password, db)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return await start_session(user, response, db)


async def handle_refresh(raw_token: str | None, response: Response, db: AsyncSession) -> User:
    """Swap a refresh token for a new pair.

    Each refresh token is good for one swap. Presenting a revoked one means
    it was copied, so every open session of that user is revoked.
    """
    if not raw_token:
        raise unauthorized("No refresh token")

    stored = await _find_refresh_token(raw_token, db)
    if stored is None:
        raise unauthorized("Invalid refresh token")

    if stored.is_revoked:
        await db.execute(
            update(RefreshToken)
            .where(RefreshToken.user_id == stored.user_id, RefreshToken.is_revoked == False)  # noqa: E712
            .values(is_revoked=True)
        )
        await db.commit()
        logger.warning("Refresh token reuse for user %s; all sessions revoked", stored.user_id)
        raise unauthorized("Refresh token reuse detected, all sessions revoked")

    if _as_utc(stored.expires_at) < datetime.now(timezone.utc):
        raise unauthorized("Refresh token expired")

    stored.is_revoked = True
    user = await db.get(User, stored.user_id)
    if not user or not user.is_active:
        raise unauthorized("User not found or inactive")

    await start_session(user, response, db)
    return user


async def handle_logout(raw_token: str | None, response: Response, db: AsyncSession) -> None:
    if raw_token:
        stored = await _find_refresh_token(raw_token, db)
        if stored:
            stored.is_revoked = True
    _clear_session_cookies(response)

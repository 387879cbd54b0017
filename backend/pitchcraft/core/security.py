"""
Credentials and session tokens.

A signed-in browser holds two httpOnly cookies: a short-lived JWT
(``ACCESS_COOKIE``) that identifies the user, and an opaque refresh token
(``REFRESH_COOKIE``) whose SHA-256 digest is stored in ``refresh_tokens``.
"""

import hashlib
import secrets
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, Request
from passlib.context import CryptContext
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.core.config import settings
from pitchcraft.db.database import get_db
from pitchcraft.models.refresh_token import RefreshToken
from pitchcraft.models.user import User

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: uuid.UUID) -> str:
    issued = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        "type": "access",
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def read_access_token(token: str) -> uuid.UUID:
    """User id carried by a valid access token; 401 for anything else."""
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise unauthorized("Invalid token")

    if claims.get("type") != "access":
        raise unauthorized("Invalid token type")
    try:
        return uuid.UUID(claims["sub"])
    except (KeyError, ValueError):
        raise unauthorized("Invalid token payload")


def hash_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()


async def create_refresh_token(user_id: uuid.UUID, db: AsyncSession) -> str:
    """Store the digest of a new refresh token and return the raw value for the cookie."""
    raw_token = secrets.token_urlsafe(64)
    db.add(
        RefreshToken(
            user_id=user_id,
            token_hash=hash_token(raw_token),
            expires_at=datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )
    )
    await db.flush()
    return raw_token


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """The active user behind the access cookie."""
    token = request.cookies.get(ACCESS_COOKIE)
    if not token:
        raise unauthorized("Not authenticated")

    user = await db.get(User, read_access_token(token))
    if not user or not user.is_active:
        raise unauthorized("User not found or inactive")
    return user

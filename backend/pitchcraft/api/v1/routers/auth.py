"""Account routes. Cookies carry the session; bodies only carry credentials."""

from fastapi import APIRouter, Cookie, Depends, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.api.deps import get_db, get_session
from pitchcraft.controllers import auth_controller
from pitchcraft.core.security import REFRESH_COOKIE
from pitchcraft.schemas.auth import LoginRequest, SessionContext, SessionRead, SignupRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    return await auth_controller.signup(payload.email, payload.password, response, db)


@router.post("/login", response_model=SessionRead)
async def login(
    payload: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    return await auth_controller.login(payload.email, payload.password, response, db)


@router.get("/me", response_model=SessionRead)
async def get_me(session: SessionContext = Depends(get_session)):
    """Who is signed in (the header shows the email)."""
    return session


@router.post("/refresh")
async def refresh(
    response: Response,
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_COOKIE),
    db: AsyncSession = Depends(get_db),
):
    user = await auth_controller.handle_refresh(refresh_token, response, db)
    return {"status": "ok", "user_id": str(user.id)}


@router.post("/logout")
async def logout(
    response: Response,
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_COOKIE),
    db: AsyncSession = Depends(get_db),
):
    await auth_controller.handle_logout(refresh_token, response, db)
    return {"status": "logged_out"}

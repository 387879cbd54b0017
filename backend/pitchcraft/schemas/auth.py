import uuid
from dataclasses import dataclass

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, description="Minimum 6 characters")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


@dataclass(frozen=True)
class SessionContext:
    """Identity of the signed-in user, handed to every orchestration call."""

    uid: uuid.UUID
    email: str


class SessionRead(BaseModel):
    uid: uuid.UUID
    email: str

    model_config = {"from_attributes": True}

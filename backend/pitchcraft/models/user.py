from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from pitchcraft.models.base import BaseUUIDModel

if TYPE_CHECKING:
    from pitchcraft.models.pitch import Pitch
    from pitchcraft.models.refresh_token import RefreshToken


class User(BaseUUIDModel, table=True):
    __tablename__ = "users"

    email: str = Field(max_length=320, unique=True, index=True)
    hashed_password: str | None = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    # Relationships
    pitches: list["Pitch"] = Relationship(back_populates="user")
    refresh_tokens: list["RefreshToken"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

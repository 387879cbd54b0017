from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Column, Text
from sqlmodel import Field, Relationship

from pitchcraft.models.base import BaseUUIDModel

if TYPE_CHECKING:
    from pitchcraft.models.user import User


class Pitch(BaseUUIDModel, table=True):
    """An idea merged with its generated pitch.  Written once, never updated."""

    __tablename__ = "pitches"

    user_id: UUID = Field(foreign_key="users.id", index=True)

    # Idea fields
    idea_name: str = Field(max_length=255)
    description: str = Field(sa_column=Column(Text, nullable=False))
    industry: str = Field(max_length=50)
    tone: str = Field(max_length=20)

    # Generated fields
    pitch_name: str = Field(max_length=255)
    tagline: str = Field(max_length=255)
    pitch: str = Field(sa_column=Column(Text, nullable=False))
    problem_statement: str = Field(sa_column=Column(Text, nullable=False))
    solution_statement: str = Field(sa_column=Column(Text, nullable=False))
    target_audience: str = Field(sa_column=Column(Text, nullable=False))
    landing_copy: str = Field(sa_column=Column(Text, nullable=False))

    # Relationships
    user: "User" = Relationship(back_populates="pitches")

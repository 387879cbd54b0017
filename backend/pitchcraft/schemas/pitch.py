"""
Data contract between the intake form, the AI agent and the pitch store.

JSON payloads use camelCase (``ideaName``, ``pitchName`` ...); Python code uses
the snake_case attribute names.
"""

import datetime
from enum import Enum
from typing import Literal, get_args
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TONE_LABELS = {
    "formal": "Formal & Professional",
    "fun": "Fun & Quirky",
    "concise": "Concise & Direct",
    "empathetic": "Empathetic & Mission-driven",
}

Industry = Literal[
    "Technology",
    "Education",
    "Fintech",
    "Health & Wellness",
    "E-commerce",
    "Social Media",
    "Other",
]
Tone = Literal["formal", "fun", "concise", "empathetic"]

INDUSTRIES = get_args(Industry)

GENERATED_FIELDS = (
    "pitch_name",
    "tagline",
    "pitch",
    "problem_statement",
    "solution_statement",
    "target_audience",
    "landing_copy",
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IdeaInput(CamelModel):
    """What the user typed into the create form.

    The description length rule lives in the intake flow so that a short
    description is rejected without touching the AI service.
    """

    idea_name: str = Field(default="", max_length=255)
    description: str = ""
    industry: Industry = "Technology"
    tone: Tone = "formal"


class GeneratedPitch(CamelModel):
    """Structured output of the pitch agent.  All seven fields are required."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    pitch_name: str = Field(min_length=1, max_length=255, description="The final, best startup name.")
    tagline: str = Field(min_length=1, max_length=255, description="A catchy, 5-word maximum tagline.")
    pitch: str = Field(min_length=1, description="The 2-3 sentence elevator pitch.")
    problem_statement: str = Field(min_length=1, description="A clear problem definition.")
    solution_statement: str = Field(min_length=1, description="A clear solution definition.")
    target_audience: str = Field(
        min_length=1,
        description="A detailed persona description of the target audience.",
    )
    landing_copy: str = Field(
        min_length=1,
        description="The website hero section copy (3-4 lines).",
    )


class PitchRead(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    user_id: UUID
    idea_name: str
    description: str
    industry: str
    tone: str
    pitch_name: str
    tagline: str
    pitch: str
    problem_statement: str
    solution_statement: str
    target_audience: str
    landing_copy: str
    created_at: datetime.datetime


class PitchSummary(CamelModel):
    """One row of the dashboard list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    pitch_name: str
    tagline: str
    tone: str
    created_at: datetime.datetime
    created_label: str


class PitchCreated(CamelModel):
    id: UUID
    state: str


class DashboardState(str, Enum):
    loading = "loading"
    loaded = "loaded"
    errored = "errored"


class DashboardRead(CamelModel):
    state: DashboardState
    count: int
    pitches: list[PitchSummary]
    empty_message: str | None = None


class IntakeOptions(CamelModel):
    industries: list[str]
    tones: dict[str, str]
    min_description_length: int

"""
Pitch generation agent for PitchCraft.

A single **pitch_agent** turns an ``IdeaInput`` into a ``GeneratedPitch``.
The agent's output type is the pydantic model itself, so the model is held to
the seven-field schema and a response that is not valid JSON, misses a field
or leaves one empty never comes back as a partial pitch.

The model is resolved per run from ``settings.PITCH_MODEL`` so that importing
this module never needs provider credentials.
"""

import logging

from pydantic_ai import Agent, RunContext
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from pitchcraft.core.config import settings
from pitchcraft.core.exceptions import GenerationError
from pitchcraft.schemas.pitch import GeneratedPitch, IdeaInput

logger = logging.getLogger(__name__)


_PERSONA = """\
You are PitchCraft, an expert AI startup partner and creative director. Your \
job is to take a raw startup idea and generate professional, structured pitch \
components."""


def build_system_instruction(tone: str) -> str:
    """Persona plus output rules; the tone is echoed exactly as the user chose it."""
    return (
        f"{_PERSONA}\n"
        "- The output MUST be a valid JSON object.\n"
        "- The output MUST adhere strictly to the JSON schema provided.\n"
        f'- The tone must match the user\'s request: "{tone}".\n'
        "- The content should be compelling, professional, and concise."
    )


def build_user_prompt(idea: IdeaInput) -> str:
    return (
        "Generate a complete pitch based on this startup idea:\n"
        f"- Startup Name (User Suggestion, use this if provided): {idea.idea_name or 'None'}\n"
        f"- Detailed Description: {idea.description}\n"
        f"- Primary Industry: {idea.industry}\n"
        "\n"
        "Generate the following components:\n"
        "1. Creative Startup Name (If user didn't provide a good one).\n"
        "2. A catchy, 5-word maximum tagline.\n"
        "3. A 2-3 sentence elevator pitch summary.\n"
        "4. A clear problem statement.\n"
        "5. A clear solution statement.\n"
        "6. A definition of the ideal target audience persona.\n"
        "7. 3-4 lines of website hero section copy."
    )


pitch_agent = Agent(
    None,
    output_type=GeneratedPitch,
    deps_type=IdeaInput,
    retries=settings.GENERATION_RETRIES,
)


def resolve_model() -> Model | str:
    """The configured model, with the API key from settings for OpenAI names."""
    provider, _, model_name = settings.PITCH_MODEL.partition(":")
    if provider == "openai" and settings.OPENAI_API_KEY:
        return OpenAIChatModel(model_name, provider=OpenAIProvider(api_key=settings.OPENAI_API_KEY))
    # Other providers read their own credentials from the environment
    return settings.PITCH_MODEL


@pitch_agent.system_prompt
def _system_instruction(ctx: RunContext[IdeaInput]) -> str:
    return build_system_instruction(ctx.deps.tone)


async def generate_pitch(idea: IdeaInput) -> GeneratedPitch:
    """Ask the model for a pitch.  Raises ``GenerationError`` on any failure."""
    try:
        result = await pitch_agent.run(
            build_user_prompt(idea),
            deps=idea,
            model=resolve_model(),
            model_settings={"timeout": settings.GENERATION_TIMEOUT_SECONDS},
        )
    except Exception as e:
        logger.error("Pitch generation failed: %s", e, exc_info=True)
        raise GenerationError() from e

    pitch: GeneratedPitch = result.output
    logger.info("Generated pitch %r (%s tone)", pitch.pitch_name, idea.tone)
    return pitch

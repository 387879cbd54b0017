# tests/test_pitch_generator.py
import pytest
from pydantic_ai import capture_run_messages
from pydantic_ai.messages import ModelResponse, SystemPromptPart, ToolCallPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.models.test import TestModel

from pitchcraft.core.config import settings
from pitchcraft.core.exceptions import GenerationError
from pitchcraft.core.pitch_generator import (
    build_system_instruction,
    build_user_prompt,
    generate_pitch,
    pitch_agent,
    resolve_model,
)
from pitchcraft.schemas.pitch import GeneratedPitch, IdeaInput

REQUIRED_KEYS = {
    "pitchName",
    "tagline",
    "pitch",
    "problemStatement",
    "solutionStatement",
    "targetAudience",
    "landingCopy",
}

STUB_OUTPUT = {
    "pitchName": "Acme",
    "tagline": "Mentors on demand, always",
    "pitch": "Acme connects students with mentors. Sessions in seconds.",
    "problemStatement": "Students lack access to professionals.",
    "solutionStatement": "1-on-1 career calls and mock interviews.",
    "targetAudience": "Final-year university students.",
    "landingCopy": "Your career, accelerated.\nReal mentors.\nStart today.",
}


def _output_call(args):
    """FunctionModel that answers with a single call to the output tool."""
    def _respond(messages, info: AgentInfo) -> ModelResponse:
        return ModelResponse(parts=[ToolCallPart(info.output_tools[0].name, args)])
    return FunctionModel(_respond)


def test_system_instruction_echoes_tone_verbatim():
    text = build_system_instruction("Empathetic & Mission-driven")
    assert 'The tone must match the user\'s request: "Empathetic & Mission-driven".' in text
    assert "valid JSON object" in text
    assert "JSON schema" in text


def test_user_prompt_uses_placeholder_when_name_missing(idea):
    prompt = build_user_prompt(idea)
    assert "use this if provided): None" in prompt
    assert "A 30-character idea description." in prompt
    assert "Primary Industry: Technology" in prompt
    # seven numbered components
    assert "7. 3-4 lines of website hero section copy." in prompt
    assert "8." not in prompt


def test_user_prompt_includes_given_name():
    prompt = build_user_prompt(IdeaInput(idea_name="MentorMate", description="x" * 25))
    assert "use this if provided): MentorMate" in prompt


def test_output_schema_requires_all_seven_fields():
    schema = GeneratedPitch.model_json_schema(by_alias=True)
    assert set(schema["properties"]) == REQUIRED_KEYS
    assert set(schema["required"]) == REQUIRED_KEYS
    assert all(p["type"] == "string" for p in schema["properties"].values())


async def test_generate_pitch_returns_all_fields(idea):
    with pitch_agent.override(model=TestModel(custom_output_args=STUB_OUTPUT)):
        with capture_run_messages() as messages:
            pitch = await generate_pitch(idea)

    dumped = pitch.model_dump(by_alias=True)
    assert set(dumped) == REQUIRED_KEYS
    assert all(isinstance(v, str) and v for v in dumped.values())
    assert pitch.pitch_name == "Acme"

    request_parts = messages[0].parts
    system = [p.content for p in request_parts if isinstance(p, SystemPromptPart)]
    user = [p.content for p in request_parts if isinstance(p, UserPromptPart)]
    assert any('"formal"' in s for s in system)
    assert "Detailed Description: A 30-character idea description." in user[0]


async def test_missing_key_is_a_generation_error(idea):
    partial = {k: v for k, v in STUB_OUTPUT.items() if k != "landingCopy"}
    with pitch_agent.override(model=_output_call(partial)):
        with pytest.raises(GenerationError) as exc:
            await generate_pitch(idea)
    assert "Failed to generate pitch" in exc.value.message


async def test_empty_field_is_a_generation_error(idea):
    with pitch_agent.override(model=_output_call({**STUB_OUTPUT, "tagline": ""})):
        with pytest.raises(GenerationError):
            await generate_pitch(idea)


async def test_malformed_json_is_a_generation_error(idea):
    with pitch_agent.override(model=_output_call('{"pitchName": "Acme", "tagline": ')):
        with pytest.raises(GenerationError):
            await generate_pitch(idea)


async def test_transport_failure_is_a_generation_error(idea):
    def _boom(messages, info):
        raise ConnectionError("upstream unreachable")

    with pitch_agent.override(model=FunctionModel(_boom)):
        with pytest.raises(GenerationError) as exc:
            await generate_pitch(idea)
    assert isinstance(exc.value.__cause__, ConnectionError)


def test_openai_model_gets_key_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "PITCH_MODEL", "openai:gpt-4o-mini")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    model = resolve_model()
    assert isinstance(model, OpenAIChatModel)
    assert model.model_name == "gpt-4o-mini"


def test_other_models_are_passed_by_name(monkeypatch):
    monkeypatch.setattr(settings, "PITCH_MODEL", "google-gla:gemini-2.0-flash")
    assert resolve_model() == "google-gla:gemini-2.0-flash"


@pytest.mark.parametrize("key", ["pitchName", "tagline"])
async def test_output_too_long_for_its_column_is_a_generation_error(idea, key):
    with pitch_agent.override(model=_output_call({**STUB_OUTPUT, key: "x" * 256})):
        with pytest.raises(GenerationError):
            await generate_pitch(idea)

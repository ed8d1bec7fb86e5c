import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.agents import ats_score_agent, question_bank_agent, resume_parser_agent
from app.core.exceptions import LLMFormatError
from app.schemas.CareerSchemas import GeneratedQuestions, ResponseAnalysis
from app.schemas.JobSchemas import ParsedResume
from app.services.llm_gateway import LLMGateway, parse_model_reply, strip_code_fences
from tests.conftest import FakeGateway

PARSED = {"skills": ["Python", "Go"], "experience": ["Built APIs"], "projects": [], "summary": "Engineer"}

ATS_REPLY = {
    "overallScore": 68,
    "sectionScores": {
        "contentSections": 22,
        "grammarLanguage": 12,
        "formattingStructure": 17,
        "atsOptimization": 10,
        "pageLength": 4,
        "linksContactInfo": 3,
    },
    "doneRight": ["Clear headings"],
    "improvements": ["Add a LinkedIn link"],
    "summary": "Solid resume.",
    "detectedSections": ["Experience", "Skills"],
    "missingSections": ["Projects"],
    "keywordsFound": ["Python"],
    "pageCount": 7,
}


def test_strip_code_fences_json_fence():
    reply = '```json\n{"a": 1}\n```'
    assert strip_code_fences(reply) == '{"a": 1}'


def test_strip_code_fences_bare_fence_and_whitespace():
    reply = '  \n```\n{"a": 1}\n```\n  '
    assert strip_code_fences(reply) == '{"a": 1}'


def test_strip_code_fences_leaves_unfenced_reply():
    assert strip_code_fences('{"a": 1}') == '{"a": 1}'


def test_parse_model_reply_with_fencing():
    parsed = parse_model_reply("```json\n" + json.dumps(PARSED) + "\n```", ParsedResume)
    assert parsed.skills == ["Python", "Go"]
    assert parsed.summary == "Engineer"


def test_parse_model_reply_without_fencing():
    parsed = parse_model_reply(json.dumps(PARSED), ParsedResume)
    assert parsed.experience == ["Built APIs"]


def test_parse_model_reply_invalid_json_is_format_error():
    with pytest.raises(LLMFormatError) as exc_info:
        parse_model_reply("Sure! Here is the JSON you asked for:", ParsedResume, "Bad reply")
    assert exc_info.value.message == "Bad reply"
    assert exc_info.value.status_code == 500


def test_parse_model_reply_schema_mismatch_is_format_error():
    with pytest.raises(LLMFormatError):
        parse_model_reply('{"questions": ["only one"]}', GeneratedQuestions)


def test_response_analysis_scores_are_bounded():
    reply = json.dumps({
        "clarity": 11, "structure": 5, "depth": 5,
        "responseSummary": "s", "expectedAnswer": "e",
    })
    with pytest.raises(LLMFormatError):
        parse_model_reply(reply, ResponseAnalysis)


def test_parsed_resume_coerces_loose_shapes():
    parsed = ParsedResume.model_validate({
        "skills": {"languages": ["Python", "Go"], "tools": ["Docker"]},
        "experience": [{"role": "Engineer", "company": "Acme"}],
        "projects": "Compiler",
        "summary": None,
    })
    assert parsed.skills == ["Python", "Go", "Docker"]
    assert parsed.experience == ["Engineer - Acme"]
    assert parsed.projects == ["Compiler"]
    assert parsed.summary == ""


@pytest.mark.asyncio
async def test_generate_passes_model_and_temperature():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="```json\n{}\n```"))
    gateway = LLMGateway(client=client, model="gemini-test")

    parsed = await gateway.generate_structured("prompt", ParsedResume, 0.3)

    assert parsed == ParsedResume()
    kwargs = client.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["contents"] == "prompt"
    assert kwargs["config"].temperature == 0.3


@pytest.mark.asyncio
async def test_resume_parser_uses_zero_temperature_and_includes_text():
    gateway = FakeGateway([json.dumps(PARSED)])

    parsed = await resume_parser_agent.parse_resume_text(gateway, "Skills: Python, Go")

    assert parsed.skills == ["Python", "Go"]
    prompt, temperature = gateway.calls[0]
    assert temperature == 0
    assert prompt.endswith("RESUME TEXT:\nSkills: Python, Go")


@pytest.mark.asyncio
async def test_ats_score_keeps_measured_page_count():
    gateway = FakeGateway([json.dumps(ATS_REPLY)])

    report = await ats_score_agent.score_resume(gateway, "resume text", page_count=2)

    assert report.pageCount == 2
    assert report.sectionScores.pageLength == 4
    assert gateway.calls[0][1] == 0.15
    assert "Estimated Page Count: 2" in gateway.calls[0][0]


@pytest.mark.asyncio
async def test_role_questions_prompt_and_count():
    questions = {"questions": [f"Q{i}" for i in range(1, 6)]}
    gateway = FakeGateway([json.dumps(questions)])

    result = await question_bank_agent.questions_from_role(gateway, "Data Engineer", "5+ years")

    assert result.questions == ["Q1", "Q2", "Q3", "Q4", "Q5"]
    prompt, temperature = gateway.calls[0]
    assert "Job Role: Data Engineer" in prompt
    assert "Experience Level: 5+ years" in prompt
    assert temperature == 0.3

"""
Resume Parser Agent

Reads a resume (extracted PDF text or an image) into skills, experience,
projects and summary.
"""

from app.schemas.JobSchemas import ParsedResume
from app.services.llm_gateway import LLMGateway, image_part

TEMPERATURE = 0
ERROR_MESSAGE = "Failed to parse the resume into a structured format."

PARSE_INSTRUCTIONS = """You are a resume parser. Analyze this resume document and extract the following information in a structured JSON format.

Return ONLY valid JSON with no markdown formatting, no code blocks, no extra text. The JSON should have these exact keys:
{
  "skills": ["skill1", "skill2", ...],
  "experience": ["experience description 1", "experience description 2", ...],
  "projects": ["project description 1", "project description 2", ...],
  "summary": "A brief summary/about section of the candidate"
}

List skills in order of prominence in the resume, most prominent first.
If a section is not found, return an empty array for arrays or empty string for summary.
Parse the resume thoroughly and extract ALL relevant information."""


def build_text_prompt(resume_text: str) -> str:
    return f"{PARSE_INSTRUCTIONS}\n\nRESUME TEXT:\n{resume_text}"


async def parse_resume_text(gateway: LLMGateway, resume_text: str) -> ParsedResume:
    return await gateway.generate_structured(
        build_text_prompt(resume_text), ParsedResume, TEMPERATURE, ERROR_MESSAGE
    )


async def parse_resume_image(gateway: LLMGateway, image_data: bytes, mime_type: str) -> ParsedResume:
    """Send the instructions plus the raw image; the model reads it directly."""
    contents = [PARSE_INSTRUCTIONS, image_part(image_data, mime_type)]
    return await gateway.generate_structured(contents, ParsedResume, TEMPERATURE, ERROR_MESSAGE)

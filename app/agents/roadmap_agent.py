from typing import Optional

from app.schemas.CareerSchemas import CareerRoadmap
from app.services.llm_gateway import LLMGateway

# Slightly creative but structured
TEMPERATURE = 0.2
ERROR_MESSAGE = "Failed to generate a properly formatted roadmap."


def build_prompt(resume_text: str, timeframe: str, target_industry: str, additional_goals: Optional[str]) -> str:
    return f"""You are an expert career counselor and strategist. Analyze this resume along with the user's goals to create a structured, step-by-step career roadmap.

Resume details:
{resume_text}

User Goals:
- Timeframe: {timeframe}
- Target Industry: {target_industry}
- Additional Goals & Context: {additional_goals or "None provided"}

Return ONLY valid JSON with no markdown formatting, no code blocks, no extra text. The JSON should have these exact keys:
{{
  "currentPosition": "The candidate's current position fetched from the resume's latest experience section",
  "targetPosition": "A summarized sentence of the target industry plus additional goals",
  "strategyOverview": "A 1 paragraph overview of the strategy to reach the target",
  "steps": [
    {{
      "title": "Step 1 main action title",
      "subSteps": ["Specific actionable sub-step 1a", "Specific actionable sub-step 1b", "Specific actionable sub-step 1c"]
    }}
  ],
  "skillsToDevelop": ["Skill 1", "Skill 2", "Skill 3"],
  "longTermVision": ["After achieving the target goal, do X to solidify career", "Do Y to expand your domain influence", "Do Z to future-proof your career"]
}}

IMPORTANT INSTRUCTIONS:
- Ensure exactly 5 steps are provided with 3-4 specific, actionable sub-steps each.
- Each step title should be a concise action-oriented description.
- Each sub-step should be a concrete, executable action (e.g. "Enroll in AWS Solutions Architect certification course" not just "Learn cloud").
- For longTermVision, provide 3-5 bullet points describing what the candidate should do AFTER they have achieved their target goal within the selected timeframe.
- Be specific and actionable based on the provided resume and goals."""


async def generate_roadmap(
    gateway: LLMGateway,
    resume_text: str,
    timeframe: str,
    target_industry: str,
    additional_goals: Optional[str] = None,
) -> CareerRoadmap:
    prompt = build_prompt(resume_text, timeframe, target_industry, additional_goals)
    return await gateway.generate_structured(prompt, CareerRoadmap, TEMPERATURE, ERROR_MESSAGE)

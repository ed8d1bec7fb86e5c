"""
Question Bank Agent

Generates five interview questions (from a resume, or from a job role and
experience level) and grades a candidate's answer to a single question.
"""

from app.schemas.CareerSchemas import GeneratedQuestions, ResponseAnalysis
from app.services.llm_gateway import LLMGateway

QUESTION_COUNT = 5
GENERATION_TEMPERATURE = 0.3
ANALYSIS_TEMPERATURE = 0.2

QUESTIONS_ERROR = "Failed to generate properly formatted questions."
ANALYSIS_ERROR = "Failed to generate properly formatted analysis."

QUESTIONS_JSON_SHAPE = """Return ONLY valid JSON with no markdown formatting, no code blocks, no extra text. The JSON should be:
{
  "questions": [
    "Question 1 text",
    "Question 2 text",
    "Question 3 text",
    "Question 4 text",
    "Question 5 text"
  ]
}"""


def build_resume_prompt(resume_text: str) -> str:
    return f"""You are an expert technical interviewer. Analyze the following resume and generate exactly {QUESTION_COUNT} interview questions based on the candidate's skills, projects, and experience.

Resume content:
{resume_text}

The questions should be a mix of:
- Technical questions about their listed skills
- Behavioral questions about their projects and experience
- Problem-solving questions relevant to their domain

{QUESTIONS_JSON_SHAPE}

Make the questions specific and relevant to the candidate's actual resume content."""


def build_role_prompt(job_role: str, experience: str) -> str:
    return f"""You are an expert technical interviewer. Generate exactly {QUESTION_COUNT} interview questions for a candidate applying for the following role:

Job Role: {job_role}
Experience Level: {experience}

The questions should be appropriate for the experience level and specific to the job role. Include a mix of:
- Technical questions relevant to the role
- Behavioral/situational questions
- Problem-solving questions

For a fresher, focus more on fundamentals and theoretical knowledge.
For 5+ years experience, focus on architecture, design patterns, and leadership scenarios.
For 10+ years experience, focus on system design, strategic thinking, and team management.

{QUESTIONS_JSON_SHAPE}

Make the questions challenging and specific to the role and experience level."""


def build_analysis_prompt(question: str, response: str) -> str:
    return f"""You are an expert interview coach. Analyze the following interview response and provide detailed feedback.

Question: {question}

Candidate's Response: {response}

Evaluate the response on these three metrics (score each from 0 to 10):
1. **Clarity** - How clear and understandable the response is
2. **Structure** - How well-organized and logical the response is
3. **Depth** - How thorough and detailed the response is

Also provide:
- A brief summary of the candidate's response (2-3 sentences)
- An expected/ideal answer that shows how the candidate could improve their response (3-4 sentences)

Return ONLY valid JSON with no markdown formatting, no code blocks, no extra text. The JSON should be:
{{
  "clarity": 7,
  "structure": 6,
  "depth": 8,
  "responseSummary": "Summary of what the candidate said...",
  "expectedAnswer": "An ideal response would include..."
}}

Be fair but constructive in your scoring. A score of 5 means average, 7-8 means good, 9-10 means excellent."""


async def questions_from_resume(gateway: LLMGateway, resume_text: str) -> GeneratedQuestions:
    return await gateway.generate_structured(
        build_resume_prompt(resume_text), GeneratedQuestions, GENERATION_TEMPERATURE, QUESTIONS_ERROR
    )


async def questions_from_role(gateway: LLMGateway, job_role: str, experience: str) -> GeneratedQuestions:
    return await gateway.generate_structured(
        build_role_prompt(job_role, experience), GeneratedQuestions, GENERATION_TEMPERATURE, QUESTIONS_ERROR
    )


async def analyze_response(gateway: LLMGateway, question: str, response: str) -> ResponseAnalysis:
    return await gateway.generate_structured(
        build_analysis_prompt(question, response), ResponseAnalysis, ANALYSIS_TEMPERATURE, ANALYSIS_ERROR
    )

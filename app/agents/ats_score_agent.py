"""
ATS Score Agent

Scores a resume's compatibility with applicant tracking systems on six
weighted criteria that add up to 100 points.
"""

from app.schemas.CareerSchemas import ATSReport
from app.services.llm_gateway import LLMGateway

TEMPERATURE = 0.15
ERROR_MESSAGE = "Failed to generate a properly formatted ATS analysis."

CRITERIA = """Evaluate the resume on ALL of the following criteria:

**1. Content Sections (30 points)**
- Does the resume have a clear Work Experience section with proper job titles, company names, dates, and bullet-point descriptions?
- Does it have a Projects section with project names, descriptions, technologies used, and links?
- Does it have a Skills section with relevant technical and soft skills, properly categorized?
- Does it have a professional Summary/Objective section at the top?
- Does it have an Education section with degree, institution, dates, and GPA (if applicable)?
- Are there certifications, awards, or publications if relevant?

**2. Grammar & Language (15 points)**
- Are there any grammatical errors, typos, or awkward phrasing?
- Are action verbs used to start bullet points (Developed, Implemented, Led, etc.)?
- Is the language professional and concise?

**3. Formatting & Structure (25 points)**
- Are section headers clearly defined and consistent in style?
- Are there uneven paddings or spacing issues detectable from the text structure?
- Are important numbers, metrics, and achievements likely emphasized?
- Are dates aligned consistently and is bullet point formatting consistent?

**4. ATS Optimization (15 points)**
- Does the resume avoid tables, columns, headers/footers, and graphics that ATS cannot parse?
- Are standard section headings used (e.g., "Work Experience" not "Where I've Worked")?
- Are keywords and industry terms present?
- Does it avoid special characters or unusual formatting?

**5. Page Length (5 points)**
- Is the resume ideally 1 page for entry-level/mid-level or 2 pages max for senior roles?

**6. Links & Contact Info (10 points)**
- Does the resume include project links (GitHub, live demos), a LinkedIn profile, a portfolio?
- Is there proper contact information (email, phone) and is the name prominent at the top?"""


def build_prompt(resume_text: str, page_count: int) -> str:
    return f"""You are an expert ATS (Applicant Tracking System) resume analyzer and career coach. You have extensive knowledge of how ATS systems like Lever, Greenhouse, Workday, Taleo, iCIMS, and others parse and score resumes.

Analyze the following resume text thoroughly and provide a comprehensive ATS compatibility score.

Resume Text:
\"\"\"
{resume_text}
\"\"\"

Estimated Page Count: {page_count}

{CRITERIA}

Return ONLY valid JSON with no markdown formatting, no code blocks, no extra text. The JSON must have these exact keys:
{{
  "overallScore": <number 0-100>,
  "sectionScores": {{
    "contentSections": <number 0-30>,
    "grammarLanguage": <number 0-15>,
    "formattingStructure": <number 0-25>,
    "atsOptimization": <number 0-15>,
    "pageLength": <number 0-5>,
    "linksContactInfo": <number 0-10>
  }},
  "doneRight": ["Specific thing done well 1", "..."],
  "improvements": ["Specific improvement needed 1 with actionable advice", "..."],
  "summary": "A 2-3 sentence overall assessment of the resume's ATS compatibility",
  "detectedSections": ["List of sections found in the resume"],
  "missingSections": ["List of important sections missing from the resume"],
  "keywordsFound": ["List of relevant keywords/skills detected"],
  "pageCount": {page_count}
}}

Be strict but fair in your scoring. Most average resumes score between 45-65. Well-optimized resumes score 70-85. Only exceptional resumes score above 85. Provide at least 5 items each for doneRight and improvements."""


async def score_resume(gateway: LLMGateway, resume_text: str, page_count: int) -> ATSReport:
    report = await gateway.generate_structured(
        build_prompt(resume_text, page_count), ATSReport, TEMPERATURE, ERROR_MESSAGE
    )
    # the measured estimate wins over whatever the model echoed back
    report.pageCount = page_count
    return report

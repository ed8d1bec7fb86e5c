"""
Question Bank API Endpoints

Interview question generation (from a resume or from a role) and grading of
a candidate's answer.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.agents import question_bank_agent
from app.core.exceptions import ServiceException, to_http_exception
from app.schemas.CareerSchemas import AnalyzeResponseRequest, RoleQuestionsRequest
from app.schemas.JobSchemas import APIResponse
from app.services.llm_gateway import LLMGateway, get_llm_gateway
from app.services.pdf_service import extract_pdf_file
from app.tools.file_uploader import PDF_ONLY, scoped_upload
from app.tools.serializers import to_json

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-from-resume", response_model=APIResponse)
async def generate_questions_from_resume(
    resume: Optional[UploadFile] = File(None),
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    if resume is None:
        raise HTTPException(status_code=400, detail="Resume file is required")

    try:
        async with scoped_upload(resume, PDF_ONLY, "Only PDF resumes are supported.") as stored:
            extracted = await extract_pdf_file(stored.path, stored.content_type)
        questions = await question_bank_agent.questions_from_resume(gateway, extracted.text)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Generate questions from resume error")
        raise HTTPException(status_code=500, detail="Internal server error while generating questions")

    return {"status": 200, "message": "Questions generated successfully", "data": to_json(questions)}


@router.post("/generate-from-role", response_model=APIResponse)
async def generate_questions_from_role(
    request: RoleQuestionsRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    if not request.jobRole or not request.experience:
        raise HTTPException(status_code=400, detail="Job role and experience are required")

    try:
        questions = await question_bank_agent.questions_from_role(gateway, request.jobRole, request.experience)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Generate questions from role error")
        raise HTTPException(status_code=500, detail="Internal server error while generating questions")

    return {"status": 200, "message": "Questions generated successfully", "data": to_json(questions)}


@router.post("/analyze", response_model=APIResponse)
async def analyze_interview_response(
    request: AnalyzeResponseRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    """Grade an answer on clarity, structure and depth (0-10 each)."""
    if not request.question or not request.response:
        raise HTTPException(status_code=400, detail="Question and response are required")

    try:
        analysis = await question_bank_agent.analyze_response(gateway, request.question, request.response)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Analyze response error")
        raise HTTPException(status_code=500, detail="Internal server error while analyzing response")

    return {"status": 200, "message": "Response analyzed successfully", "data": to_json(analysis)}

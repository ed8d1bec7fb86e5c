import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.agents.ats_score_agent import score_resume
from app.core.exceptions import ServiceException, to_http_exception
from app.schemas.JobSchemas import APIResponse
from app.services.llm_gateway import LLMGateway, get_llm_gateway
from app.services.pdf_service import extract_pdf_file
from app.tools.file_uploader import PDF_ONLY, scoped_upload
from app.tools.serializers import to_json

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=APIResponse)
async def analyze_ats_score(
    resume: Optional[UploadFile] = File(None),
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    """Score a PDF resume's compatibility with applicant tracking systems."""
    if resume is None:
        raise HTTPException(status_code=400, detail="Resume file is required")

    try:
        async with scoped_upload(resume, PDF_ONLY, "Only PDF files are supported for ATS score analysis.") as stored:
            extracted = await extract_pdf_file(stored.path, stored.content_type)
        report = await score_resume(gateway, extracted.text, extracted.page_count)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("ATS score analysis error")
        raise HTTPException(status_code=500, detail="Internal server error while analyzing ATS score")

    return {"status": 200, "message": "ATS score analysis completed successfully", "data": to_json(report)}

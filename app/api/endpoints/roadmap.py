import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.agents.roadmap_agent import generate_roadmap
from app.core.exceptions import ServiceException, to_http_exception
from app.schemas.JobSchemas import APIResponse
from app.services.llm_gateway import LLMGateway, get_llm_gateway
from app.services.pdf_service import extract_pdf_file
from app.tools.file_uploader import PDF_ONLY, scoped_upload
from app.tools.serializers import to_json

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=APIResponse)
async def generate_career_roadmap(
    resume: Optional[UploadFile] = File(None),
    timeframe: Optional[str] = Form(None),
    targetIndustry: Optional[str] = Form(None),
    additionalGoals: Optional[str] = Form(None),
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    """
    Build a five-step career roadmap from a PDF resume and the user's goals.
    """
    if not timeframe or not targetIndustry:
        raise HTTPException(status_code=400, detail="Timeframe and target industry are required")
    if resume is None:
        raise HTTPException(status_code=400, detail="Resume file is required")

    try:
        async with scoped_upload(
            resume, PDF_ONLY, "Only PDF resumes are supported for roadmap generation at this time."
        ) as stored:
            extracted = await extract_pdf_file(stored.path, stored.content_type)
        roadmap = await generate_roadmap(gateway, extracted.text, timeframe, targetIndustry, additionalGoals)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Generate roadmap error")
        raise HTTPException(status_code=500, detail="Internal server error while generating roadmap")

    return {"status": 200, "message": "Roadmap generated successfully", "data": to_json(roadmap)}

"""
Jobs API Endpoints

Resume upload with job matching, plus the shortlist of saved jobs.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.core.exceptions import ServiceException, to_http_exception
from app.schemas.JobSchemas import APIResponse, RemoveShortlistRequest, ShortlistRequest
from app.services import shortlist_service
from app.services.geocoding_service import NominatimGeocoder, get_geocoder
from app.services.job_search_service import JSearchClient, get_job_search_client
from app.services.llm_gateway import LLMGateway, get_llm_gateway
from app.tools.file_uploader import PDF_OR_IMAGE, scoped_upload
from app.tools.serializers import to_json
from app.workflows.resume.job_matching_workflow import match_jobs_for_upload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/uploadresume", response_model=APIResponse)
async def upload_resume(
    resume: Optional[UploadFile] = File(None),
    userId: Optional[str] = Form(None),
    gateway: LLMGateway = Depends(get_llm_gateway),
    client: JSearchClient = Depends(get_job_search_client),
    geocoder: NominatimGeocoder = Depends(get_geocoder),
):
    """
    Parse an uploaded resume (PDF or PNG/JPEG image) and fetch matching jobs.

    The upload is recorded against the user, the resume is read by the model,
    and the top skills drive a job search whose results are deduplicated and
    geocoded. A failing job search still returns 200 with an empty job list.
    """
    if not userId:
        raise HTTPException(status_code=400, detail="User ID is required")
    if resume is None:
        raise HTTPException(status_code=400, detail="Resume file is required")

    try:
        async with scoped_upload(resume, PDF_OR_IMAGE, "Only PDF and image files are allowed") as stored:
            result = await match_jobs_for_upload(userId, stored, gateway, client, geocoder)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Upload resume error")
        raise HTTPException(status_code=500, detail="Internal server error while processing resume")

    return {
        "status": 200,
        "message": "Resume parsed and jobs fetched successfully",
        "data": to_json(result),
    }


@router.post("/shortlist", status_code=status.HTTP_201_CREATED, response_model=APIResponse)
async def shortlist_job(request: ShortlistRequest):
    try:
        job = await shortlist_service.shortlist_job(request)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Shortlist job error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"status": 201, "message": "Job shortlisted successfully", "data": to_json(job)}


@router.get("/shortlisted/{user_id}", response_model=APIResponse)
async def get_shortlisted_jobs(user_id: str):
    """The user's shortlisted jobs, newest first."""
    try:
        jobs = await shortlist_service.list_shortlisted(user_id)
    except Exception:
        logger.exception("Get shortlisted jobs error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"status": 200, "message": "Shortlisted jobs fetched", "data": to_json(jobs)}


@router.delete("/shortlisted/{job_id}", response_model=APIResponse)
async def remove_shortlisted_job(job_id: str, request: Optional[RemoveShortlistRequest] = None):
    try:
        await shortlist_service.remove_shortlisted(job_id, request.userId if request else None)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Remove shortlisted job error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"status": 200, "message": "Job removed from shortlist"}

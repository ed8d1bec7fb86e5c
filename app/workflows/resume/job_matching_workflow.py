import asyncio
import logging

from app.agents.resume_parser_agent import parse_resume_image, parse_resume_text
from app.core.exceptions import LLMFormatError, NotFoundError
from app.crud import crud_resume, crud_user
from app.schemas.JobSchemas import ParsedResume, UploadResumeData
from app.services.geocoding_service import GeocodeCache, NominatimGeocoder
from app.services.job_search_service import JSearchClient, fetch_jobs_for_resume
from app.services.llm_gateway import LLMGateway
from app.services.pdf_service import PDF_MIME_TYPE, extract_pdf
from app.tools.file_uploader import StoredUpload
from app.tools.serializers import parse_object_id

logger = logging.getLogger(__name__)

RESUMES_FIELD = "resumes"


async def parse_uploaded_resume(gateway: LLMGateway, upload: StoredUpload) -> ParsedResume:
    """Parse a stored PDF or image upload.

    An unreadable PDF propagates as PdfExtractionError. A model reply that
    cannot be parsed degrades to an empty ParsedResume so the job search
    still runs on the fallback query.
    """
    data = await asyncio.to_thread(upload.read_bytes)
    try:
        if upload.content_type == PDF_MIME_TYPE:
            extracted = await asyncio.to_thread(extract_pdf, data, upload.content_type)
            return await parse_resume_text(gateway, extracted.text)
        return await parse_resume_image(gateway, data, upload.content_type)
    except LLMFormatError as e:
        logger.warning("Resume parsing returned an unusable reply: %s", e)
        return ParsedResume()


async def match_jobs_for_upload(
    user_id: str,
    upload: StoredUpload,
    gateway: LLMGateway,
    client: JSearchClient,
    geocoder: NominatimGeocoder,
) -> UploadResumeData:
    """Record the upload, parse the resume and search for matching jobs."""
    oid = parse_object_id(user_id)
    user = await crud_user.get_user_by_id(oid) if oid else None
    if not user:
        raise NotFoundError("User not found")

    resume = await crud_resume.create_resume_record(user)
    await crud_user.add_reference(user.id, RESUMES_FIELD, resume.id)

    parsed = await parse_uploaded_resume(gateway, upload)
    # the cache lives for this request only
    jobs = await fetch_jobs_for_resume(parsed, client, geocoder, GeocodeCache())

    return UploadResumeData(resumeId=str(resume.id), parsedResume=parsed, jobs=jobs)

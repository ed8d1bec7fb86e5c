"""
Shortlist Service

Saving, listing and removing a user's shortlisted jobs. The child document and
the user's back-reference are two separate writes; there is no cross-document
transaction.
"""

import logging
from typing import List

from app.core.exceptions import ConflictError, InvalidRequestError, NotFoundError
from app.crud import crud_shortlist, crud_user
from app.schemas.JobSchemas import ShortlistedJobOut, ShortlistRequest
from app.tools.serializers import parse_object_id

logger = logging.getLogger(__name__)

SHORTLIST_FIELD = "shortlistedJobs"


async def shortlist_job(request: ShortlistRequest) -> ShortlistedJobOut:
    if not request.userId or not request.jobTitle or not request.companyName:
        raise InvalidRequestError("User ID, job title, and company name are required")

    user_id = parse_object_id(request.userId)
    user = await crud_user.get_user_by_id(user_id) if user_id else None
    if not user:
        raise NotFoundError("User not found")

    job_title = request.jobTitle.strip()
    company_name = request.companyName.strip()

    existing = await crud_shortlist.find_shortlisted(user.id, job_title, company_name)
    if existing:
        raise ConflictError("Job already shortlisted")

    job = await crud_shortlist.create_shortlisted(
        user_id=user.id,
        job_title=job_title,
        company_name=company_name,
        company_image=request.companyImage or "",
        application_url=request.applicationUrl or "",
    )
    await crud_user.add_reference(user.id, SHORTLIST_FIELD, job.id)

    logger.info("User %s shortlisted job %s", user.id, job.id)
    return ShortlistedJobOut.from_doc(job)


async def list_shortlisted(user_id: str) -> List[ShortlistedJobOut]:
    """The user's shortlisted jobs, newest first. Unknown users have none."""
    oid = parse_object_id(user_id)
    if not oid:
        return []
    jobs = await crud_shortlist.get_shortlisted_for_user(oid)
    return [ShortlistedJobOut.from_doc(j) for j in jobs]


async def remove_shortlisted(job_id: str, user_id: str = None) -> None:
    """Delete a shortlisted job and pull it from its owner's shortlist."""
    oid = parse_object_id(job_id)
    job = await crud_shortlist.get_shortlisted_by_id(oid) if oid else None
    if not job:
        raise NotFoundError("Shortlisted job not found")

    owner_id = getattr(job, "userId", None) or parse_object_id(user_id)
    if owner_id:
        await crud_user.remove_reference(owner_id, SHORTLIST_FIELD, job.id)
    await crud_shortlist.delete_shortlisted(job)

    logger.info("Removed shortlisted job %s", job.id)

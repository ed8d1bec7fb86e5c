from typing import List, Optional

from beanie import PydanticObjectId
from app.schemas.documents import ShortlistedJobDoc


async def find_shortlisted(
    user_id: PydanticObjectId, job_title: str, company_name: str
) -> Optional[ShortlistedJobDoc]:
    return await ShortlistedJobDoc.find_one(
        {"userId": user_id, "jobTitle": job_title, "companyName": company_name}
    )


async def create_shortlisted(
    user_id: PydanticObjectId,
    job_title: str,
    company_name: str,
    company_image: str = "",
    application_url: str = "",
) -> ShortlistedJobDoc:
    job = ShortlistedJobDoc(
        jobTitle=job_title,
        companyName=company_name,
        companyImage=company_image,
        applicationUrl=application_url,
        userId=user_id,
    )
    await job.insert()
    return job


async def get_shortlisted_for_user(user_id: PydanticObjectId) -> List[ShortlistedJobDoc]:
    """Return the user's shortlisted jobs, newest first."""
    return await ShortlistedJobDoc.find_many({"userId": user_id}).sort("-createdAt").to_list()


async def get_shortlisted_by_id(job_id: PydanticObjectId) -> Optional[ShortlistedJobDoc]:
    return await ShortlistedJobDoc.get(job_id)


async def delete_shortlisted(job: ShortlistedJobDoc) -> None:
    await job.delete()

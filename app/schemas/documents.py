from beanie import Document, Indexed, PydanticObjectId
from pydantic import Field
from typing import List
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserDoc(Document):
    name: str
    # stored lowercase; uniqueness is also checked before insert
    email: Indexed(str, unique=True)
    password: str
    shortlistedJobs: List[PydanticObjectId] = Field(default_factory=list)
    resumes: List[PydanticObjectId] = Field(default_factory=list)
    createdAt: datetime = Field(default_factory=_utcnow)
    updatedAt: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "users"


class ResumeDoc(Document):
    userId: PydanticObjectId
    userEmail: str
    createdAt: datetime = Field(default_factory=_utcnow)
    updatedAt: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "resumes"


class ShortlistedJobDoc(Document):
    jobTitle: str
    companyName: str
    companyImage: str = ""
    applicationUrl: str = ""
    userId: PydanticObjectId
    createdAt: datetime = Field(default_factory=_utcnow)
    updatedAt: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "shortlistedJobs"

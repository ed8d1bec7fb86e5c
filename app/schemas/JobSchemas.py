import pydantic
from pydantic import BaseModel, Field
from typing import Any, List, Optional

from app.services.resume_normalization import ensure_list_of_strings, ensure_text


class ParsedResume(BaseModel):
    """Structured reading of a resume produced by the parsing prompt."""
    skills: List[str] = Field(default_factory=list)
    experience: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    summary: str = ""

    @pydantic.field_validator("skills", "experience", "projects", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any):
        return ensure_list_of_strings(v)

    @pydantic.field_validator("summary", mode="before")
    @classmethod
    def _coerce_summary(cls, v: Any):
        return ensure_text(v)


class Coordinates(BaseModel):
    lat: float
    lon: float


class JobResult(BaseModel):
    jobTitle: str
    companyName: str
    companyImage: str
    applicationUrl: str
    location: str = ""
    datePosted: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def has_coordinates(self) -> bool:
        # 0.0 from the job API means "unknown", not the null island
        return bool(self.latitude) and bool(self.longitude)


class UploadResumeData(BaseModel):
    resumeId: str
    parsedResume: ParsedResume
    jobs: List[JobResult] = Field(default_factory=list)


class ShortlistRequest(BaseModel):
    # Optional so that missing fields surface as 400 rather than 422
    userId: Optional[str] = None
    jobTitle: Optional[str] = None
    companyName: Optional[str] = None
    companyImage: Optional[str] = None
    applicationUrl: Optional[str] = None


class RemoveShortlistRequest(BaseModel):
    userId: Optional[str] = None


class ShortlistedJobOut(BaseModel):
    id: str = Field(alias="_id")
    jobTitle: str
    companyName: str
    companyImage: str = ""
    applicationUrl: str = ""
    userId: str
    createdAt: Optional[Any] = None
    updatedAt: Optional[Any] = None

    model_config = pydantic.ConfigDict(populate_by_name=True)

    @classmethod
    def from_doc(cls, doc: Any) -> "ShortlistedJobOut":
        return cls(
            id=str(doc.id),
            jobTitle=doc.jobTitle,
            companyName=doc.companyName,
            companyImage=doc.companyImage or "",
            applicationUrl=doc.applicationUrl or "",
            userId=str(doc.userId),
            createdAt=getattr(doc, "createdAt", None),
            updatedAt=getattr(doc, "updatedAt", None),
        )


class APIResponse(BaseModel):
    """Envelope for every successful response: { status, message, data }"""
    status: int = 200
    message: str
    data: Optional[Any] = None

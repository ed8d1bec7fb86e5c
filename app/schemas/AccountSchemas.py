import pydantic
from pydantic import BaseModel, Field
from typing import Any, List, Optional

from app.schemas.JobSchemas import ShortlistedJobOut


class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    """Public fields of a user; never carries the password hash."""
    id: str = Field(alias="_id")
    name: str
    email: str

    model_config = pydantic.ConfigDict(populate_by_name=True)

    @classmethod
    def from_doc(cls, doc: Any) -> "UserPublic":
        return cls(id=str(doc.id), name=doc.name, email=doc.email)


class ResumeRecordOut(BaseModel):
    id: str = Field(alias="_id")
    userId: str
    userEmail: str
    createdAt: Optional[Any] = None
    updatedAt: Optional[Any] = None

    model_config = pydantic.ConfigDict(populate_by_name=True)

    @classmethod
    def from_doc(cls, doc: Any) -> "ResumeRecordOut":
        return cls(
            id=str(doc.id),
            userId=str(doc.userId),
            userEmail=doc.userEmail,
            createdAt=getattr(doc, "createdAt", None),
            updatedAt=getattr(doc, "updatedAt", None),
        )


class UserProfile(UserPublic):
    """User with its resume records and shortlisted jobs populated."""
    resumes: List[ResumeRecordOut] = Field(default_factory=list)
    shortlistedJobs: List[ShortlistedJobOut] = Field(default_factory=list)
    createdAt: Optional[Any] = None
    updatedAt: Optional[Any] = None

"""
Account Service

Signup, login and profile retrieval on top of the user CRUD layer.
"""

import asyncio
import logging

from passlib.hash import pbkdf2_sha256
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
)
from app.crud import crud_user
from app.schemas.AccountSchemas import (
    LoginRequest,
    ResumeRecordOut,
    SignupRequest,
    UserProfile,
    UserPublic,
)
from app.schemas.JobSchemas import ShortlistedJobOut
from app.tools.serializers import parse_object_id

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    # pbkdf2_sha256 generates a fresh salt per hash
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pbkdf2_sha256.verify(password, password_hash)
    except ValueError:
        # stored value is not a recognisable hash
        return False


async def signup(request: SignupRequest) -> UserPublic:
    name = (request.name or "").strip()
    email = normalize_email(request.email or "")
    if not name or not email or not request.password:
        raise InvalidRequestError("All fields are required")

    if await crud_user.get_user_by_email(email):
        raise ConflictError("User with this email already exists")

    # CPU-bound, so it runs in a worker thread
    password_hash = await asyncio.to_thread(hash_password, request.password)
    try:
        user = await crud_user.create_user(name=name, email=email, password_hash=password_hash)
    except DuplicateKeyError:
        # lost a race with a concurrent signup for the same address
        raise ConflictError("User with this email already exists")

    logger.info("Created user %s", user.id)
    return UserPublic.from_doc(user)


async def login(request: LoginRequest) -> UserPublic:
    email = normalize_email(request.email or "")
    if not email or not request.password:
        raise InvalidRequestError("Email and password are required")

    user = await crud_user.get_user_by_email(email)
    if not user or not await asyncio.to_thread(verify_password, request.password, user.password):
        raise AuthenticationError()

    return UserPublic.from_doc(user)


async def get_profile(user_id: str) -> UserProfile:
    """Return the user without its password, resumes and shortlist populated."""
    oid = parse_object_id(user_id)
    user = await crud_user.get_user_by_id(oid) if oid else None
    if not user:
        raise NotFoundError("User not found")

    resumes = await crud_user.get_resumes_by_ids(user.resumes)
    shortlisted = await crud_user.get_shortlisted_by_ids(user.shortlistedJobs)

    return UserProfile(
        id=str(user.id),
        name=user.name,
        email=user.email,
        resumes=[ResumeRecordOut.from_doc(r) for r in resumes],
        shortlistedJobs=[ShortlistedJobOut.from_doc(j) for j in shortlisted],
        createdAt=getattr(user, "createdAt", None),
        updatedAt=getattr(user, "updatedAt", None),
    )

import logging

from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import ServiceException, to_http_exception
from app.schemas.AccountSchemas import LoginRequest, SignupRequest
from app.schemas.JobSchemas import APIResponse
from app.services import account_service
from app.tools.serializers import to_json

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=APIResponse)
async def signup(request: SignupRequest):
    """Create an account and return its public fields."""
    try:
        user = await account_service.signup(request)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Signup error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"status": 201, "message": "User created successfully", "data": to_json(user)}


@router.post("/login", response_model=APIResponse)
async def login(request: LoginRequest):
    try:
        user = await account_service.login(request)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Login error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"status": 200, "message": "Login successful", "data": to_json(user)}


@router.get("/profile/{user_id}", response_model=APIResponse)
async def get_profile(user_id: str):
    """User profile with resumes and shortlisted jobs populated."""
    try:
        profile = await account_service.get_profile(user_id)
    except ServiceException as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception("Get profile error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"status": 200, "message": "User profile fetched", "data": to_json(profile)}

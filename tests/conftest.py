"""
Shared fixtures: a TestClient with the LLM, job-search and geocoding
dependencies replaced by in-process fakes. No MongoDB, model or HTTP traffic
leaves the test process.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.config import settings
from app.services.geocoding_service import get_geocoder
from app.services.job_search_service import get_job_search_client
from app.services.llm_gateway import LLMGateway, get_llm_gateway

USER_ID = "507f1f77bcf86cd799439011"
JOB_ID = "507f1f77bcf86cd799439022"
RESUME_ID = "507f1f77bcf86cd799439033"


class FakeGateway(LLMGateway):
    """LLMGateway whose replies are queued up front instead of coming from Gemini."""

    def __init__(self, replies=None):
        super().__init__(client=object(), model="test-model")
        self.replies = list(replies or [])
        self.calls = []

    async def generate(self, contents, temperature):
        self.calls.append((contents, temperature))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_user(**overrides):
    data = {
        "id": ObjectId(USER_ID),
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "password": "hash",
        "resumes": [],
        "shortlistedJobs": [],
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def make_shortlisted(**overrides):
    data = {
        "id": ObjectId(JOB_ID),
        "jobTitle": "Backend Engineer",
        "companyName": "Acme",
        "companyImage": "",
        "applicationUrl": "",
        "userId": ObjectId(USER_ID),
    }
    data.update(overrides)
    return SimpleNamespace(**data)


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def fake_job_client():
    return SimpleNamespace(search=AsyncMock(return_value=[]))


@pytest.fixture
def fake_geocoder():
    return SimpleNamespace(geocode=AsyncMock(return_value=None))


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def client(fake_gateway, fake_job_client, fake_geocoder, upload_dir):
    from main import app

    app.dependency_overrides[get_llm_gateway] = lambda: fake_gateway
    app.dependency_overrides[get_job_search_client] = lambda: fake_job_client
    app.dependency_overrides[get_geocoder] = lambda: fake_geocoder
    # not used as a context manager, so the Mongo lifespan never runs
    yield TestClient(app)
    app.dependency_overrides.clear()

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId

from app.core.exceptions import ConflictError, UpstreamUnavailableError
from app.crud import crud_resume, crud_shortlist, crud_user
from app.services.account_service import hash_password
from app.services.pdf_service import ExtractedPdf
from tests.conftest import JOB_ID, RESUME_ID, USER_ID, make_shortlisted, make_user

PDF_FILE = ("resume.pdf", b"%PDF-1.4 fake", "application/pdf")
TEXT_FILE = ("resume.txt", b"plain text resume", "text/plain")

PARSED_REPLY = json.dumps({
    "skills": ["Python", "Go", "Kubernetes"],
    "experience": ["Backend engineer at Acme"],
    "projects": ["Job finder"],
    "summary": "Backend engineer",
})

QUESTIONS_REPLY = "```json\n" + json.dumps({"questions": [f"Question {i}?" for i in range(1, 6)]}) + "\n```"


@pytest.fixture
def extracted_text():
    with patch(
        "app.services.pdf_service.extract_pdf",
        return_value=ExtractedPdf(text="Jane Doe\nPython Go", page_count=1),
    ) as extract, patch(
        "app.workflows.resume.job_matching_workflow.extract_pdf",
        new=extract,
    ):
        yield extract


@pytest.fixture
def no_db_writes():
    with patch.object(crud_user, "get_user_by_id", AsyncMock()) as by_id, \
            patch.object(crud_resume, "create_resume_record", AsyncMock()) as create_resume, \
            patch.object(crud_user, "add_reference", AsyncMock()) as add_ref:
        yield SimpleNamespace(get_user_by_id=by_id, create_resume_record=create_resume, add_reference=add_ref)


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "message": "Server is running"}


@pytest.mark.parametrize("url", [
    "/api/ats-score/analyze",
    "/api/question-bank/generate-from-resume",
])
def test_pdf_endpoints_reject_other_types(client, fake_gateway, upload_dir, url):
    r = client.post(url, files={"resume": TEXT_FILE})

    assert r.status_code == 400
    assert fake_gateway.calls == []
    assert list(upload_dir.iterdir()) == []


def test_roadmap_rejects_non_pdf(client, fake_gateway):
    r = client.post(
        "/api/roadmap/generate",
        files={"resume": TEXT_FILE},
        data={"timeframe": "1 year", "targetIndustry": "Fintech"},
    )

    assert r.status_code == 400
    assert r.json()["detail"] == "Only PDF resumes are supported for roadmap generation at this time."
    assert fake_gateway.calls == []


def test_roadmap_requires_goals_before_file(client):
    r = client.post("/api/roadmap/generate", data={"timeframe": "1 year"})

    assert r.status_code == 400
    assert r.json()["detail"] == "Timeframe and target industry are required"


def test_roadmap_generation(client, fake_gateway, extracted_text):
    fake_gateway.replies.append(json.dumps({
        "currentPosition": "Backend Engineer",
        "targetPosition": "Staff engineer in fintech",
        "strategyOverview": "Grow scope.",
        "steps": [{"title": f"Step {i}", "subSteps": ["a", "b", "c"]} for i in range(1, 6)],
        "skillsToDevelop": ["System design"],
        "longTermVision": ["Mentor others"],
    }))

    r = client.post(
        "/api/roadmap/generate",
        files={"resume": PDF_FILE},
        data={"timeframe": "1 year", "targetIndustry": "Fintech"},
    )

    assert r.status_code == 200
    assert len(r.json()["data"]["steps"]) == 5
    prompt, temperature = fake_gateway.calls[0]
    assert "Timeframe: 1 year" in prompt
    assert "Additional Goals & Context: None provided" in prompt
    assert temperature == 0.2


def test_ats_score_success(client, fake_gateway, extracted_text, upload_dir):
    fake_gateway.replies.append(json.dumps({
        "overallScore": 72,
        "sectionScores": {
            "contentSections": 24, "grammarLanguage": 12, "formattingStructure": 18,
            "atsOptimization": 10, "pageLength": 5, "linksContactInfo": 3,
        },
        "doneRight": ["Action verbs"],
        "improvements": ["Add links"],
        "summary": "Good.",
        "detectedSections": ["Experience"],
        "missingSections": [],
        "keywordsFound": ["Python"],
        "pageCount": 3,
    }))

    r = client.post("/api/ats-score/analyze", files={"resume": PDF_FILE})

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == 200
    assert body["data"]["overallScore"] == 72
    assert body["data"]["pageCount"] == 1
    assert list(upload_dir.iterdir()) == []


def test_ats_score_bad_model_reply(client, fake_gateway, extracted_text, upload_dir):
    fake_gateway.replies.append("I cannot score this resume.")

    r = client.post("/api/ats-score/analyze", files={"resume": PDF_FILE})

    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to generate a properly formatted ATS analysis."
    assert list(upload_dir.iterdir()) == []


def test_upload_too_large(client, monkeypatch, fake_gateway):
    from app.core.config import settings

    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 10)
    r = client.post("/api/ats-score/analyze", files={"resume": ("big.pdf", b"x" * 11, "application/pdf")})

    assert r.status_code == 413
    assert fake_gateway.calls == []


def test_upload_resume_requires_user_id(client, no_db_writes):
    r = client.post("/api/jobs/uploadresume", files={"resume": PDF_FILE})

    assert r.status_code == 400
    assert r.json()["detail"] == "User ID is required"
    no_db_writes.get_user_by_id.assert_not_awaited()


def test_upload_resume_requires_file(client, no_db_writes):
    r = client.post("/api/jobs/uploadresume", data={"userId": USER_ID})

    assert r.status_code == 400
    assert r.json()["detail"] == "Resume file is required"


def test_upload_resume_rejects_text_file(client, no_db_writes, fake_gateway):
    r = client.post("/api/jobs/uploadresume", files={"resume": TEXT_FILE}, data={"userId": USER_ID})

    assert r.status_code == 400
    no_db_writes.get_user_by_id.assert_not_awaited()
    no_db_writes.create_resume_record.assert_not_awaited()
    no_db_writes.add_reference.assert_not_awaited()
    assert fake_gateway.calls == []


def test_upload_resume_unknown_user(client, no_db_writes):
    no_db_writes.get_user_by_id.return_value = None

    r = client.post("/api/jobs/uploadresume", files={"resume": PDF_FILE}, data={"userId": USER_ID})

    assert r.status_code == 404
    no_db_writes.create_resume_record.assert_not_awaited()


def test_upload_resume_matches_jobs(
    client, no_db_writes, fake_gateway, fake_job_client, fake_geocoder, extracted_text, upload_dir
):
    no_db_writes.get_user_by_id.return_value = make_user()
    no_db_writes.create_resume_record.return_value = SimpleNamespace(id=ObjectId(RESUME_ID))
    fake_gateway.replies.append(PARSED_REPLY)
    fake_job_client.search.return_value = [
        {"job_title": "Go Developer", "employer_name": "Acme", "job_city": "Berlin", "job_country": "DE"},
        {"job_title": "go developer", "employer_name": "ACME", "job_city": "Paris", "job_country": "FR"},
        {"job_title": "Python Engineer", "employer_name": "Globex", "job_latitude": 40.7, "job_longitude": -74.0},
    ]
    fake_geocoder.geocode.return_value = None

    r = client.post("/api/jobs/uploadresume", files={"resume": PDF_FILE}, data={"userId": USER_ID})

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["resumeId"] == RESUME_ID
    assert data["parsedResume"]["skills"] == ["Python", "Go", "Kubernetes"]
    assert [j["jobTitle"] for j in data["jobs"]] == ["Go Developer", "Python Engineer"]
    assert data["jobs"][0]["applicationUrl"] == "#"
    assert data["jobs"][1]["latitude"] == 40.7

    fake_job_client.search.assert_awaited_once_with("Python Go")
    fake_geocoder.geocode.assert_awaited_once_with("Berlin DE")
    no_db_writes.add_reference.assert_awaited_once_with(ObjectId(USER_ID), "resumes", ObjectId(RESUME_ID))
    assert fake_gateway.calls[0][1] == 0
    assert list(upload_dir.iterdir()) == []


def test_upload_resume_job_api_down_still_succeeds(
    client, no_db_writes, fake_gateway, fake_job_client, extracted_text, upload_dir
):
    no_db_writes.get_user_by_id.return_value = make_user()
    no_db_writes.create_resume_record.return_value = SimpleNamespace(id=ObjectId(RESUME_ID))
    fake_gateway.replies.append(PARSED_REPLY)
    fake_job_client.search.side_effect = UpstreamUnavailableError("down")

    r = client.post("/api/jobs/uploadresume", files={"resume": PDF_FILE}, data={"userId": USER_ID})

    assert r.status_code == 200
    assert r.json()["data"]["jobs"] == []
    assert list(upload_dir.iterdir()) == []


def test_upload_resume_unparseable_reply_uses_fallback_query(
    client, no_db_writes, fake_gateway, fake_job_client, extracted_text
):
    no_db_writes.get_user_by_id.return_value = make_user()
    no_db_writes.create_resume_record.return_value = SimpleNamespace(id=ObjectId(RESUME_ID))
    fake_gateway.replies.append("not json at all")

    r = client.post("/api/jobs/uploadresume", files={"resume": PDF_FILE}, data={"userId": USER_ID})

    assert r.status_code == 200
    assert r.json()["data"]["parsedResume"]["skills"] == []
    fake_job_client.search.assert_awaited_once_with("software engineer")


def test_upload_resume_image_goes_to_model(client, no_db_writes, fake_gateway, fake_job_client):
    no_db_writes.get_user_by_id.return_value = make_user()
    no_db_writes.create_resume_record.return_value = SimpleNamespace(id=ObjectId(RESUME_ID))
    fake_gateway.replies.append(PARSED_REPLY)

    r = client.post(
        "/api/jobs/uploadresume",
        files={"resume": ("resume.png", b"\x89PNG fake", "image/png")},
        data={"userId": USER_ID},
    )

    assert r.status_code == 200
    contents, _ = fake_gateway.calls[0]
    assert isinstance(contents, list) and len(contents) == 2


def test_shortlist_conflict(client):
    with patch("app.services.shortlist_service.shortlist_job", AsyncMock(side_effect=ConflictError("Job already shortlisted"))):
        r = client.post("/api/jobs/shortlist", json={"userId": USER_ID, "jobTitle": "Dev", "companyName": "Acme"})

    assert r.status_code == 409
    assert r.json()["detail"] == "Job already shortlisted"


def test_shortlist_missing_fields(client):
    r = client.post("/api/jobs/shortlist", json={"userId": USER_ID})
    assert r.status_code == 400


def test_shortlist_created(client):
    with patch.object(crud_user, "get_user_by_id", AsyncMock(return_value=make_user())), \
            patch.object(crud_shortlist, "find_shortlisted", AsyncMock(return_value=None)), \
            patch.object(crud_shortlist, "create_shortlisted", AsyncMock(return_value=make_shortlisted())), \
            patch.object(crud_user, "add_reference", AsyncMock()):
        r = client.post(
            "/api/jobs/shortlist",
            json={"userId": USER_ID, "jobTitle": "Backend Engineer", "companyName": "Acme"},
        )

    assert r.status_code == 201
    body = r.json()
    assert body["status"] == 201
    assert body["data"]["_id"] == JOB_ID


def test_get_shortlisted(client):
    with patch.object(crud_shortlist, "get_shortlisted_for_user", AsyncMock(return_value=[make_shortlisted()])):
        r = client.get(f"/api/jobs/shortlisted/{USER_ID}")

    assert r.status_code == 200
    assert r.json()["data"][0]["userId"] == USER_ID


def test_delete_shortlisted(client):
    with patch.object(crud_shortlist, "get_shortlisted_by_id", AsyncMock(return_value=make_shortlisted())), \
            patch.object(crud_user, "remove_reference", AsyncMock()) as remove_ref, \
            patch.object(crud_shortlist, "delete_shortlisted", AsyncMock()) as delete:
        r = client.request("DELETE", f"/api/jobs/shortlisted/{JOB_ID}", json={"userId": USER_ID})

    assert r.status_code == 200
    assert r.json()["message"] == "Job removed from shortlist"
    remove_ref.assert_awaited_once()
    delete.assert_awaited_once()


def test_delete_shortlisted_missing(client):
    with patch.object(crud_shortlist, "get_shortlisted_by_id", AsyncMock(return_value=None)):
        r = client.delete(f"/api/jobs/shortlisted/{JOB_ID}")

    assert r.status_code == 404


def test_signup_created(client):
    with patch.object(crud_user, "get_user_by_email", AsyncMock(return_value=None)), \
            patch.object(crud_user, "create_user", AsyncMock(return_value=make_user())):
        r = client.post("/api/auth/signup", json={"name": "Ada", "email": "ada@example.com", "password": "pw"})

    assert r.status_code == 201
    data = r.json()["data"]
    assert data == {"_id": USER_ID, "name": "Ada Lovelace", "email": "ada@example.com"}


def test_signup_missing_fields(client):
    r = client.post("/api/auth/signup", json={"email": "ada@example.com"})
    assert r.status_code == 400
    assert r.json()["detail"] == "All fields are required"


def test_login_status_codes(client):
    user = make_user(password=hash_password("pw"))
    with patch.object(crud_user, "get_user_by_email", AsyncMock(return_value=user)):
        ok = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "pw"})
        bad = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "nope"})

    assert ok.status_code == 200
    assert "password" not in ok.json()["data"]
    assert bad.status_code == 401


def test_profile_not_found(client):
    r = client.get("/api/auth/profile/not-an-id")
    assert r.status_code == 404


def test_questions_from_role(client, fake_gateway):
    fake_gateway.replies.append(QUESTIONS_REPLY)

    r = client.post("/api/question-bank/generate-from-role", json={"jobRole": "SRE", "experience": "fresher"})

    assert r.status_code == 200
    assert len(r.json()["data"]["questions"]) == 5


def test_questions_from_role_missing_fields(client, fake_gateway):
    r = client.post("/api/question-bank/generate-from-role", json={"jobRole": "SRE"})

    assert r.status_code == 400
    assert fake_gateway.calls == []


def test_questions_from_resume(client, fake_gateway, extracted_text):
    fake_gateway.replies.append(QUESTIONS_REPLY)

    r = client.post("/api/question-bank/generate-from-resume", files={"resume": PDF_FILE})

    assert r.status_code == 200
    assert "Jane Doe" in fake_gateway.calls[0][0]


def test_analyze_response(client, fake_gateway):
    fake_gateway.replies.append(json.dumps({
        "clarity": 7, "structure": 6, "depth": 8,
        "responseSummary": "Talked about caching.",
        "expectedAnswer": "Mention invalidation.",
    }))

    r = client.post("/api/question-bank/analyze", json={"question": "Why cache?", "response": "Speed."})

    assert r.status_code == 200
    assert r.json()["data"]["clarity"] == 7
    assert fake_gateway.calls[0][1] == 0.2


def test_analyze_response_missing_fields(client):
    r = client.post("/api/question-bank/analyze", json={"question": "Why cache?"})
    assert r.status_code == 400

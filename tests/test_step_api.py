# tests/test_step_api.py

import pytest

from models.registration import Registration
from models.step_submission import StepSubmission, SubmissionStatus
from repositories.step_submission_repository import StepSubmissionRepository
from services import step_service

VALID_STEP1 = {"aadhaar": "123456789012", "otp": "123456"}


@pytest.fixture
def enforce_step_order(monkeypatch):
    monkeypatch.setattr(step_service, "ENFORCE_STEP_ORDER", True)


def _complete_step1(client):
    response = client.post("/api/validate-step1", json=VALID_STEP1)
    assert response.status_code == 200
    return response.json()["submissionId"]


def test_step1_valid(client, db_session):
    response = client.post("/api/validate-step1", json=VALID_STEP1)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Step 1 validated successfully"

    submission = db_session.query(StepSubmission).filter_by(submission_id=body["submissionId"]).one()
    assert submission.status == SubmissionStatus.STEP1_VALIDATED
    assert submission.aadhaar_last4 == "9012"


def test_step1_invalid_aadhaar(client):
    response = client.post("/api/validate-step1", json={"aadhaar": "12345", "otp": "123456"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert [e["field"] for e in body["errors"]] == ["aadhaar"]
    assert body["errors"][0]["message"] == "Enter valid 12-digit Aadhaar"


def test_step1_missing_fields(client):
    response = client.post("/api/validate-step1", json={})

    assert response.status_code == 400
    messages = {e["field"]: e["message"] for e in response.json()["errors"]}
    assert messages == {"aadhaar": "Aadhaar Number is required", "otp": "OTP is required"}


def test_step1_wrong_otp(client, db_session):
    response = client.post("/api/validate-step1", json={"aadhaar": "123456789012", "otp": "654321"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "errors" not in body
    assert body["message"] == "Invalid OTP. Use the demo OTP 123456"
    assert db_session.query(StepSubmission).count() == 0


def test_step1_ids_are_unique(client):
    assert _complete_step1(client) != _complete_step1(client)


def test_step1_non_string_value_is_rejected(client):
    response = client.post("/api/validate-step1", json={"aadhaar": 123456789012, "otp": "123456"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"][0]["field"] == "aadhaar"


def test_step2_valid_pan(client, db_session):
    response = client.post("/api/validate-step2", json={"pan": "ABCDE1234F"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["pan"] == "ABCDE1234F"
    assert body["data"]["registrationId"].startswith("UDYAM-")

    registration = db_session.query(Registration).one()
    assert registration.registration_id == body["data"]["registrationId"]
    assert registration.source == "STEP2"


def test_step2_echoes_location(client):
    payload = {"pan": "ABCDE1234F", "pincode": "110001", "city": "Central Delhi", "state": "Delhi"}

    data = client.post("/api/validate-step2", json=payload).json()["data"]

    assert data["pincode"] == "110001"
    assert data["city"] == "Central Delhi"
    assert data["state"] == "Delhi"


def test_step2_normalizes_lowercase_pan(client):
    response = client.post("/api/validate-step2", json={"pan": " abcde1234f "})

    assert response.status_code == 200
    assert response.json()["data"]["pan"] == "ABCDE1234F"


@pytest.mark.parametrize("pan", ["ABCD1234F", "ABCDE12345", "12345ABCDE", ""])
def test_step2_invalid_pan(client, pan):
    response = client.post("/api/validate-step2", json={"pan": pan})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"][0]["field"] == "pan"


def test_step2_accepts_legacy_numeric_submission_id(client):
    response = client.post("/api/validate-step2", json={"pan": "ABCDE1234F", "submissionId": 1})

    assert response.status_code == 200


def test_step2_links_known_submission(client, db_session):
    submission_id = _complete_step1(client)

    response = client.post("/api/validate-step2", json={"pan": "ABCDE1234F", "submissionId": submission_id})

    assert response.status_code == 200
    submission = db_session.query(StepSubmission).filter_by(submission_id=submission_id).one()
    assert submission.status == SubmissionStatus.COMPLETED
    assert submission.completed_at is not None
    assert db_session.query(Registration).one().submission_id == submission_id


def test_step2_each_call_mints_new_registration_id(client):
    first = client.post("/api/validate-step2", json={"pan": "ABCDE1234F"}).json()
    second = client.post("/api/validate-step2", json={"pan": "ABCDE1234F"}).json()

    assert first["data"]["registrationId"] != second["data"]["registrationId"]


def test_enforced_order_requires_submission_id(client, enforce_step_order):
    response = client.post("/api/validate-step2", json={"pan": "ABCDE1234F"})

    assert response.status_code == 400
    assert response.json()["message"] == "Complete step 1 first: submissionId is required"


def test_enforced_order_rejects_unknown_submission(client, enforce_step_order):
    response = client.post("/api/validate-step2", json={"pan": "ABCDE1234F", "submissionId": "missing"})

    assert response.status_code == 404


def test_enforced_order_rejects_completed_submission(client, enforce_step_order):
    submission_id = _complete_step1(client)
    payload = {"pan": "ABCDE1234F", "submissionId": submission_id}

    assert client.post("/api/validate-step2", json=payload).status_code == 200
    response = client.post("/api/validate-step2", json=payload)

    assert response.status_code == 409
    assert response.json()["success"] is False


def test_enforced_order_accepts_step1_submission(client, enforce_step_order):
    submission_id = _complete_step1(client)

    response = client.post("/api/validate-step2", json={"pan": "ABCDE1234F", "submissionId": submission_id})

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_pan_checked_before_step_order(client, enforce_step_order):
    response = client.post("/api/validate-step2", json={"pan": "bad"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "pan"


def test_step1_too_long_aadhaar_gets_aadhaar_message(client):
    response = client.post("/api/validate-step1", json={"aadhaar": "1234567890123", "otp": "123456"})

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "aadhaar", "message": "Enter valid 12-digit Aadhaar", "value": "1234567890123"},
    ]


def test_mark_completed_only_once(client, db_session):
    submission_id = _complete_step1(client)
    submission = db_session.query(StepSubmission).filter_by(submission_id=submission_id).one()

    assert StepSubmissionRepository.mark_completed(db_session, submission) is True
    assert StepSubmissionRepository.mark_completed(db_session, submission) is False


def test_losing_completion_race_mints_no_registration(client, db_session, enforce_step_order, monkeypatch):
    submission_id = _complete_step1(client)
    submission = db_session.query(StepSubmission).filter_by(submission_id=submission_id).one()
    # a parallel request resolved the same row and completed it first
    StepSubmissionRepository.mark_completed(db_session, submission)
    monkeypatch.setattr(step_service.StepService, "_resolve_submission", staticmethod(lambda db, sid: submission))

    response = client.post("/api/validate-step2", json={"pan": "ABCDE1234F", "submissionId": submission_id})

    assert response.status_code == 409
    assert db_session.query(Registration).count() == 0

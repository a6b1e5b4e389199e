import logging
from sqlalchemy.orm import Session
from fastapi import HTTPException
from repositories.registration_repository import RegistrationRepository
from services.step_service import new_registration_id

logger = logging.getLogger(__name__)

COPIED_FIELDS = ("pan", "pincode", "city", "state")

def redact_payload(payload: dict) -> dict:
    """Copy of ``payload`` safe to store: no OTP, Aadhaar cut to its last four digits."""
    stored = {key: value for key, value in payload.items() if key not in ("aadhaar", "otp")}
    aadhaar = payload.get("aadhaar")
    if aadhaar is not None:
        stored["aadhaar_last4"] = str(aadhaar).strip()[-4:]
    return stored

class SubmissionService:

    @staticmethod
    def submit_form(db: Session, payload) -> dict:
        if not isinstance(payload, dict):
            raise HTTPException(400, "Form payload must be a JSON object")

        registration_id = new_registration_id()
        columns = {
            key: payload[key] for key in COPIED_FIELDS
            if isinstance(payload.get(key), str)
        }
        if "pan" in columns:
            columns["pan"] = columns["pan"].strip().upper()

        RegistrationRepository.create_registration(
            db,
            registration_id=registration_id,
            source="SUBMIT_FORM",
            payload=redact_payload(payload),
            **columns,
        )
        logger.info(f"Form submission stored as {registration_id} ({len(payload)} fields)")
        return {
            "success": True,
            "message": "Udyam registration submitted successfully",
            "registrationId": registration_id,
            "data": payload,
        }

    @staticmethod
    def get_registration(db: Session, registration_id: str) -> dict:
        registration = RegistrationRepository.get_by_registration_id(db, registration_id)
        if not registration:
            raise HTTPException(404, "Registration not found")
        return {
            "registration_id": registration.registration_id,
            "submission_id":   registration.submission_id,
            "source":          registration.source,
            "pan":             registration.pan,
            "pincode":         registration.pincode,
            "city":            registration.city,
            "state":           registration.state,
            "payload":         registration.payload,
            "created_at":      registration.created_at,
        }

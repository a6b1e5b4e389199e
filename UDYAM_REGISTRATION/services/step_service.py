import logging
import uuid
from typing import Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException
from core.config import DEMO_OTP, ENFORCE_STEP_ORDER, REGISTRATION_ID_PREFIX
from models.step_submission import StepSubmission, SubmissionStatus
from repositories.step_submission_repository import StepSubmissionRepository
from repositories.registration_repository import RegistrationRepository
from services.form_schema_service import FormSchemaService
from utils.field_validator import validate_fields, normalize_value

logger = logging.getLogger(__name__)

def new_submission_id() -> str:
    return str(uuid.uuid4())

def new_registration_id() -> str:
    return f"{REGISTRATION_ID_PREFIX}{uuid.uuid4().hex[:12].upper()}"

def raise_field_errors(errors: list) -> None:
    raise HTTPException(400, {"message": "Validation failed", "errors": errors})

class StepService:
    """Server side of the two-step wizard.

    Step 1 checks the Aadhaar number and the demo OTP and records a
    submission. Step 2 checks the PAN and records the registration. Order is
    only enforced when ENFORCE_STEP_ORDER is enabled.
    """

    @staticmethod
    def validate_step1(db: Session, aadhaar: Optional[str], otp: Optional[str]) -> dict:
        aadhaar = normalize_value(aadhaar)
        otp = normalize_value(otp)

        errors = validate_fields(
            [FormSchemaService.get_field("aadhaar"), FormSchemaService.get_field("otp")],
            {"aadhaar": aadhaar, "otp": otp},
        )
        if errors:
            logger.info(f"Step 1 rejected: invalid {', '.join(e['field'] for e in errors)}")
            raise_field_errors(errors)

        if otp != DEMO_OTP:
            logger.info(f"Step 1 rejected: wrong OTP for Aadhaar ending {aadhaar[-4:]}")
            raise HTTPException(400, f"Invalid OTP. Use the demo OTP {DEMO_OTP}")

        submission = StepSubmissionRepository.create_submission(
            db, submission_id=new_submission_id(), aadhaar_last4=aadhaar[-4:]
        )
        logger.info(f"Step 1 validated, submission {submission.submission_id}")
        return {
            "success": True,
            "message": "Step 1 validated successfully",
            "submissionId": submission.submission_id,
        }

    @staticmethod
    def _resolve_submission(db: Session, submission_id: Optional[str]) -> Optional[StepSubmission]:
        if not submission_id:
            if ENFORCE_STEP_ORDER:
                raise HTTPException(400, "Complete step 1 first: submissionId is required")
            return None

        submission = StepSubmissionRepository.get_by_submission_id(db, submission_id)
        if not submission:
            if ENFORCE_STEP_ORDER:
                raise HTTPException(404, "Step 1 submission not found")
            logger.warning(f"Step 2 referenced unknown submission {submission_id}, ignoring")
            return None

        if submission.status == SubmissionStatus.COMPLETED:
            if ENFORCE_STEP_ORDER:
                raise HTTPException(409, "Registration already completed for this submission")
            return None
        return submission

    @staticmethod
    def validate_step2(
        db: Session,
        pan: Optional[str],
        pincode: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        submission_id: Optional[str] = None,
    ) -> dict:
        pan = normalize_value(pan).upper()

        errors = validate_fields([FormSchemaService.get_field("pan")], {"pan": pan})
        if errors:
            logger.info("Step 2 rejected: invalid PAN")
            raise_field_errors(errors)

        submission = StepService._resolve_submission(db, submission_id)
        if submission and not StepSubmissionRepository.mark_completed(db, submission):
            if ENFORCE_STEP_ORDER:
                raise HTTPException(409, "Registration already completed for this submission")
            submission = None

        registration_id = new_registration_id()
        data = {
            "pan":     pan,
            "pincode": pincode,
            "city":    city,
            "state":   state,
        }
        RegistrationRepository.create_registration(
            db,
            registration_id=registration_id,
            source="STEP2",
            payload=data,
            submission_id=submission.submission_id if submission else None,
            **data,
        )

        logger.info(f"Step 2 completed, registration {registration_id}")
        return {
            "success": True,
            "message": "Registration completed successfully",
            "data": {**data, "registrationId": registration_id},
        }

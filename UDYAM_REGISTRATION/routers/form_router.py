from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Any
from core.database import get_db
from schemas.form_schema import FormSchema, StepDescriptor
from schemas.step_schema import Step1Request, Step1Response, Step2Request, Step2Response
from schemas.submission_schema import SubmitFormResponse, RegistrationLookupResponse
from services.form_schema_service import FormSchemaService
from services.step_service import StepService
from services.submission_service import SubmissionService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Udyam Registration"])

@router.get("/form-schema", response_model=FormSchema, response_model_exclude_none=True)
def get_form_schema():
    return FormSchemaService.get_schema()

@router.get("/form-schema/steps/{step}", response_model=StepDescriptor, response_model_exclude_none=True)
def get_form_step(step: int):
    descriptor = FormSchemaService.get_step(step)
    if descriptor is None:
        raise HTTPException(404, f"Step {step} not found")
    return descriptor

@router.post("/validate-step1", response_model=Step1Response)
def validate_step1(request: Step1Request, db: Session = Depends(get_db)):
    try:
        return StepService.validate_step1(db=db, aadhaar=request.aadhaar, otp=request.otp)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Step 1 validation error")
        raise HTTPException(status_code=500, detail="Step 1 validation temporarily unavailable")

@router.post("/validate-step2", response_model=Step2Response)
def validate_step2(request: Step2Request, db: Session = Depends(get_db)):
    try:
        return StepService.validate_step2(
            db=db,
            pan=request.pan,
            pincode=request.pincode,
            city=request.city,
            state=request.state,
            submission_id=request.submission_id,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Step 2 validation error")
        raise HTTPException(status_code=500, detail="Step 2 validation temporarily unavailable")

@router.post("/submit-form", response_model=SubmitFormResponse)
def submit_form(payload: Any = Body(...), db: Session = Depends(get_db)):
    try:
        return SubmissionService.submit_form(db=db, payload=payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Form submission error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to submit form")

@router.get("/registrations/{registration_id}", response_model=RegistrationLookupResponse)
def get_registration(registration_id: str, db: Session = Depends(get_db)):
    try:
        record = SubmissionService.get_registration(db=db, registration_id=registration_id)
        return {"success": True, "data": record}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Registration lookup error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch registration")

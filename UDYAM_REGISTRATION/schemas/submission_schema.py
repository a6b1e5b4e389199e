from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import datetime

class SubmitFormResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    registration_id: str = Field(..., alias="registrationId")
    data: Dict[str, Any]

class RegistrationRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    registration_id: str = Field(..., alias="registrationId")
    submission_id: Optional[str] = Field(None, alias="submissionId")
    source: str
    pan: Optional[str] = None
    pincode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    payload: Dict[str, Any]
    created_at: datetime = Field(..., alias="createdAt")

class RegistrationLookupResponse(BaseModel):
    success: bool
    data: RegistrationRecord

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

class Step1Request(BaseModel):
    aadhaar: Optional[str] = None
    otp: Optional[str] = None

class Step1Response(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    submission_id: str = Field(..., alias="submissionId")

class Step2Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pan: Optional[str] = None
    pincode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    submission_id: Optional[str] = Field(None, alias="submissionId")

    @field_validator("submission_id", mode="before")
    @classmethod
    def coerce_submission_id(cls, v):
        # older clients send the numeric timestamp id
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

class Step2Data(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pan: str
    pincode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    registration_id: str = Field(..., alias="registrationId")

class Step2Response(BaseModel):
    success: bool
    message: str
    data: Step2Data

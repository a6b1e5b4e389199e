from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
import re

class FieldDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    type: str = "text"
    label: str
    placeholder: str = ""
    required: bool = False
    max_length: Optional[int] = Field(None, alias="maxLength", gt=0)
    pattern: Optional[str] = None
    readonly: bool = False

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid pattern: {e}")
        return v

class StepDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: int = Field(..., ge=1)
    title: str
    fields: List[FieldDescriptor]

class FormSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps: List[StepDescriptor] = Field(..., min_length=1)

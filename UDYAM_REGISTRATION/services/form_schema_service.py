import json
import logging
from functools import lru_cache
from typing import List, Optional
from pydantic import ValidationError
from core.config import FORM_SCHEMA_PATH
from schemas.form_schema import FormSchema, FieldDescriptor, StepDescriptor

logger = logging.getLogger(__name__)

# fields the step endpoints validate server-side
SERVER_CHECKED_FIELDS = {"aadhaar", "otp", "pan"}

STATIC_FORM_SCHEMA = {
    "steps": [
        {
            "step": 1,
            "title": "Aadhaar Number & OTP Validation",
            "fields": [
                {
                    "id": "aadhaar",
                    "name": "aadhaar",
                    "type": "text",
                    "placeholder": "Enter 12-digit Aadhaar Number",
                    "required": True,
                    "maxLength": 12,
                    "pattern": r"^[0-9]{12}$",
                    "label": "Aadhaar Number",
                },
                {
                    "id": "otp",
                    "name": "otp",
                    "type": "text",
                    "placeholder": "Enter OTP",
                    "required": True,
                    "maxLength": 6,
                    "pattern": r"^[0-9]{6}$",
                    "label": "OTP",
                },
            ],
        },
        {
            "step": 2,
            "title": "Business Details & PAN Validation",
            "fields": [
                {
                    "id": "pan",
                    "name": "pan",
                    "type": "text",
                    "placeholder": "Enter PAN Number (e.g., ABCDE1234F)",
                    "required": True,
                    "maxLength": 10,
                    "pattern": r"^[A-Z]{5}[0-9]{4}[A-Z]{1}$",
                    "label": "PAN Number",
                },
                {
                    "id": "pincode",
                    "name": "pincode",
                    "type": "text",
                    "placeholder": "Enter PIN Code",
                    "required": True,
                    "maxLength": 6,
                    "pattern": r"^[0-9]{6}$",
                    "label": "PIN Code",
                },
                {
                    "id": "city",
                    "name": "city",
                    "type": "text",
                    "placeholder": "City (auto-filled)",
                    "required": True,
                    "readonly": True,
                    "label": "City",
                },
                {
                    "id": "state",
                    "name": "state",
                    "type": "text",
                    "placeholder": "State (auto-filled)",
                    "required": True,
                    "readonly": True,
                    "label": "State",
                },
            ],
        },
    ]
}

def _load_snapshot(path: str) -> Optional[FormSchema]:
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
        schema = FormSchema.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Form schema snapshot {path} unusable, serving static schema: {e}")
        return None

    names = {field.name for step in schema.steps for field in step.fields}
    missing = SERVER_CHECKED_FIELDS - names
    if missing:
        logger.warning(f"Form schema snapshot {path} lacks fields {sorted(missing)}, serving static schema")
        return None
    return schema

@lru_cache(maxsize=1)
def load_form_schema() -> FormSchema:
    if FORM_SCHEMA_PATH:
        schema = _load_snapshot(FORM_SCHEMA_PATH)
        if schema is not None:
            logger.info(f"Form schema loaded from snapshot {FORM_SCHEMA_PATH}")
            return schema
    return FormSchema.model_validate(STATIC_FORM_SCHEMA)

class FormSchemaService:

    @staticmethod
    def get_schema() -> FormSchema:
        return load_form_schema()

    @staticmethod
    def get_step(step: int) -> Optional[StepDescriptor]:
        for descriptor in load_form_schema().steps:
            if descriptor.step == step:
                return descriptor
        return None

    @staticmethod
    def get_step_fields(step: int) -> List[FieldDescriptor]:
        descriptor = FormSchemaService.get_step(step)
        if descriptor is None:
            raise KeyError(f"Form schema has no step {step}")
        return list(descriptor.fields)

    @staticmethod
    def get_field(name: str) -> FieldDescriptor:
        for descriptor in load_form_schema().steps:
            for field in descriptor.fields:
                if field.name == name:
                    return field
        raise KeyError(f"Form schema has no field {name!r}")

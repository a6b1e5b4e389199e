import re
from typing import Iterable, List, Mapping, Optional
from schemas.form_schema import FieldDescriptor

PATTERN_MESSAGES = {
    "aadhaar": "Enter valid 12-digit Aadhaar",
    "pan":     "Enter valid PAN (ABCDE1234F)",
    "otp":     "Enter valid 6-digit OTP",
    "pincode": "Enter valid 6-digit PIN",
}
DEFAULT_PATTERN_MESSAGE = "Invalid format"

def normalize_value(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip()

def validate_field(field: FieldDescriptor, value: Optional[str]) -> Optional[str]:
    """Return an error message for ``value`` or None when it is acceptable.

    Required fields reject empty input. Optional fields that are left empty
    skip the pattern and length checks. Patterns must match the whole value
    and are checked first, so a mismatch always gets the field message.
    """
    value = normalize_value(value)
    if not value:
        if field.required:
            return f"{field.label} is required"
        return None

    if field.pattern and not re.fullmatch(field.pattern, value):
        return PATTERN_MESSAGES.get(field.name, DEFAULT_PATTERN_MESSAGE)

    if field.max_length is not None and len(value) > field.max_length:
        return f"{field.label} must be at most {field.max_length} characters"
    return None

def validate_fields(fields: Iterable[FieldDescriptor], payload: Mapping[str, Optional[str]]) -> List[dict]:
    errors = []
    for field in fields:
        value = payload.get(field.name)
        message = validate_field(field, value)
        if message:
            errors.append({"field": field.name, "message": message, "value": value})
    return errors

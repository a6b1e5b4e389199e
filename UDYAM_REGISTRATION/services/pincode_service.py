import logging
import re
from fastapi import HTTPException
from providers.pincode_provider import get_pincode_provider

logger = logging.getLogger(__name__)

PINCODE_PATTERN = re.compile(r"^[0-9]{6}$")

class PincodeService:

    @staticmethod
    def resolve(pincode: str) -> dict:
        if not PINCODE_PATTERN.fullmatch(pincode or ""):
            raise HTTPException(400, "Invalid PIN code format")

        provider = get_pincode_provider()
        try:
            result = provider.lookup(pincode)
        except RuntimeError:
            logger.exception(f"PIN code lookup failed for {pincode}")
            raise HTTPException(500, "Unable to fetch location data")

        if not result["found"]:
            logger.info(f"PIN code {pincode} not found")
            raise HTTPException(404, "PIN code not found")

        return {
            "city":    result["city"],
            "state":   result["state"],
            "area":    result["area"],
            "pincode": pincode,
        }

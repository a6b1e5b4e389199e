from fastapi import APIRouter, HTTPException
from schemas.pincode_schema import PincodeResponse
from services.pincode_service import PincodeService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["PIN Code Lookup"])

@router.get("/pincode/{pin}", response_model=PincodeResponse)
def lookup_pincode(pin: str):
    try:
        location = PincodeService.resolve(pin)
        return {"success": True, "data": location}
    except HTTPException:
        raise
    except Exception:
        logger.exception("PIN code lookup error")
        raise HTTPException(status_code=500, detail="Unable to fetch location data")

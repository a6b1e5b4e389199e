import logging
import time
import requests
from core.config import PINCODE_LOOKUP_MODE, PINCODE_API_URL, PINCODE_API_TIMEOUT_SECONDS, PINCODE_API_RETRIES, PINCODE_API_BACKOFF_SECONDS

logger = logging.getLogger(__name__)

class DummyPincodeProvider:
    LOCATIONS = {
        "110001": {"city": "Central Delhi", "state": "Delhi", "area": "Connaught Place"},
        "400001": {"city": "Mumbai", "state": "Maharashtra", "area": "Mumbai G.P.O."},
        "560001": {"city": "Bangalore", "state": "Karnataka", "area": "Bangalore G.P.O."},
        "600001": {"city": "Chennai", "state": "Tamil Nadu", "area": "Chennai G.P.O."},
        "700001": {"city": "Kolkata", "state": "West Bengal", "area": "Kolkata G.P.O."},
        "500001": {"city": "Hyderabad", "state": "Telangana", "area": "Hyderabad G.P.O."},
    }

    @staticmethod
    def lookup(pincode: str) -> dict:
        record = DummyPincodeProvider.LOCATIONS.get(pincode)
        if not record:
            return {"found": False}
        return {"found": True, **record}

class IndiaPostPincodeProvider:

    @staticmethod
    def _fetch(pincode: str):
        response = requests.get(f"{PINCODE_API_URL}/{pincode}", timeout=PINCODE_API_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def lookup(pincode: str) -> dict:
        attempts = PINCODE_API_RETRIES + 1
        for attempt in range(1, attempts + 1):
            try:
                data = IndiaPostPincodeProvider._fetch(pincode)
                break
            except (requests.RequestException, ValueError) as e:
                logger.error(f"Postal API error for {pincode} (attempt {attempt}/{attempts}): {e}")
                if attempt == attempts:
                    raise RuntimeError("Unable to fetch location data") from e
                time.sleep(PINCODE_API_BACKOFF_SECONDS * 2 ** (attempt - 1))

        # body is a one-element list: [{"Status": "Success", "PostOffice": [...]}]
        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            return {"found": False}
        entry = data[0]
        post_offices = entry.get("PostOffice") or []
        if entry.get("Status") != "Success" or not post_offices:
            return {"found": False}

        post_office = post_offices[0]
        city = post_office.get("District") or ""
        state = post_office.get("State") or ""
        if not city or not state:
            logger.warning(f"Postal API returned no district/state for {pincode}")
            return {"found": False}
        return {
            "found": True,
            "city":  city,
            "state": state,
            "area":  post_office.get("Name") or "",
        }

def get_pincode_provider():
    if PINCODE_LOOKUP_MODE == "dummy":
        logger.info("Pincode provider: Dummy (local table)")
        return DummyPincodeProvider
    logger.info("Pincode provider: India Post (real API)")
    return IndiaPostPincodeProvider

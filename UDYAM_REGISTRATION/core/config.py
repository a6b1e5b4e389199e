import os
from dotenv import load_dotenv

load_dotenv()

APP_ENV = os.getenv("APP_ENV", "development").lower()

CORS_ORIGIN_PRODUCTION  = os.getenv("CORS_ORIGIN_PRODUCTION", "https://udyam-registration-portal.vercel.app")
CORS_ORIGIN_DEVELOPMENT = os.getenv("CORS_ORIGIN_DEVELOPMENT", "http://localhost:3000")
CORS_ALLOWED_ORIGINS = [CORS_ORIGIN_PRODUCTION if APP_ENV == "production" else CORS_ORIGIN_DEVELOPMENT]

PORT = int(os.getenv("PORT", "5000"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./udyam_registration.db")

DEMO_OTP = os.getenv("DEMO_OTP", "123456")
ENFORCE_STEP_ORDER = os.getenv("ENFORCE_STEP_ORDER", "false").lower() in ("1", "true", "yes")

REGISTRATION_ID_PREFIX = "UDYAM-"

# PIN code lookup
PINCODE_LOOKUP_MODE         = os.getenv("PINCODE_LOOKUP_MODE", "api").lower()
PINCODE_API_URL             = os.getenv("PINCODE_API_URL", "https://api.postalpincode.in/pincode")
PINCODE_API_TIMEOUT_SECONDS = float(os.getenv("PINCODE_API_TIMEOUT_SECONDS", "5"))
PINCODE_API_RETRIES         = int(os.getenv("PINCODE_API_RETRIES", "1"))
PINCODE_API_BACKOFF_SECONDS = float(os.getenv("PINCODE_API_BACKOFF_SECONDS", "0.5"))

FORM_SCHEMA_PATH = os.getenv("FORM_SCHEMA_PATH")

SUBMISSION_RETENTION_HOURS = int(os.getenv("SUBMISSION_RETENTION_HOURS", "24"))
CLEANUP_INTERVAL_HOURS     = int(os.getenv("CLEANUP_INTERVAL_HOURS", "24"))

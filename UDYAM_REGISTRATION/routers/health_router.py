from datetime import datetime, timezone
from fastapi import APIRouter
from core.config import APP_ENV

router = APIRouter(prefix="/api", tags=["Health"])

@router.get("/test")
def test_backend():
    return {
        "message": "Backend server is working!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": APP_ENV,
    }

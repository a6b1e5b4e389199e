import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from core.config import APP_ENV, CORS_ALLOWED_ORIGINS, CLEANUP_INTERVAL_HOURS, PORT
from core.database import Base, engine
from routers.health_router import router as health_router
from routers.form_router import router as form_router
from routers.pincode_router import router as pincode_router
from services.auto_cleanup import AutoCleanup
import models.step_submission
import models.registration

logging.basicConfig( level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

auto_cleanup = AutoCleanup(interval_hours=CLEANUP_INTERVAL_HOURS)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Udyam registration backend ({APP_ENV})...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables created")

    auto_cleanup.start()
    logger.info("Auto cleanup service started")

    yield

    auto_cleanup.stop()
    logger.info("Udyam registration backend stopped")

app = FastAPI(title="Udyam Registration API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = {"success": False}
    if isinstance(exc.detail, dict):
        content["message"] = exc.detail.get("message", "Request failed")
        if "errors" in exc.detail:
            content["errors"] = exc.detail["errors"]
    else:
        content["message"] = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
            "value": error.get("input"),
        })
    logger.info(f"Rejected malformed request to {request.url.path}: {len(errors)} error(s)")
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"success": False, "message": "Validation failed", "errors": errors}),
    )

app.include_router(health_router)
app.include_router(form_router)
app.include_router(pincode_router)

@app.get("/")
def root():
    return {
        "status": "Udyam Registration API is running"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=PORT)

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from mindcare.api import analytics, appointments, assessments, auth, chat, counsellors, forum
from mindcare.config import settings
from mindcare.core.errors import MindCareError
from mindcare.db.database import init_db
from mindcare.observability import log_requests, setup_logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="MindCare",
    description="Student mental-health support: risk-aware chat, screening, counsellor appointments",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.middleware("http")(log_requests)


@app.on_event("startup")
def on_startup():
    """Configure logging and create tables."""
    setup_logging()
    init_db()


# Register routers
app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(chat.router, prefix="/chat", tags=["Chat"])
app.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
app.include_router(forum.router, prefix="/forum", tags=["Forum"])
app.include_router(assessments.router, prefix="/assessments", tags=["Assessments"])
app.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
app.include_router(counsellors.router, tags=["Directory"])


@app.get("/")
async def root():
    return {"message": "Welcome to MindCare", "status": "healthy"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.exception_handler(MindCareError)
async def mindcare_error_handler(request: Request, exc: MindCareError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, type(exc).__name__)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "Invalid request")
    return JSONResponse(status_code=400, content={"error": f"{field}: {msg}" if field else msg})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """All errors return JSON; internal detail stays in the log."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

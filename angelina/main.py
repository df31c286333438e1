import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models  # noqa: F401 - registers tables with Base
from .config import ALLOWED_ORIGINS, PORT, PUBLIC_DIR
from .database import Base, engine
from .domain.appointments import router as appointments_router
from .domain.contact import router as contact_router
from .email_service import EmailSender
from .shared.errors import AppError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    app.state.email_sender = EmailSender.from_config()
    if not (app.state.email_sender.smtp_configured or app.state.email_sender.resend_api_key):
        logger.warning("No email transport configured - notifications will be logged as failed")

    try:
        from .rate_limiter import get_redis_client

        get_redis_client()  # Connection test
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed - Rate limiting will operate in fail-open mode: {e}")

    yield
    logger.info("Application shutting down...")
    engine.dispose()


app = FastAPI(title="Angelina API", version="1.0.0", lifespan=lifespan)


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are reported as 400 with a readable message"""
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    fields = [
        ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        for error in exc.errors()
    ]
    fields = [field for field in fields if field]
    message = f"Invalid value for: {', '.join(fields)}" if fields else "Invalid request"
    return error_response(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown path or unsupported method on a known path
    if exc.status_code in (404, 405):
        return error_response(404, "Endpoint not found")
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} - Unhandled error: {exc}")
    return error_response(500, "Internal server error")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(appointments_router)
app.include_router(contact_router)


@app.get("/api/health")
def health():
    return {
        "status": "OK",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/", include_in_schema=False)
def root():
    index = PUBLIC_DIR / "index.html"
    if index.is_file():
        return FileResponse(index)
    return {"message": "Angelina API is running"}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"🚀 Server running on http://localhost:{PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)

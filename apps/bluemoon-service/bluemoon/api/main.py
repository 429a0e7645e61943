"""
FastAPI app assembly: logging, middleware, error shaping and router wiring.
"""
import logging
import os
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("bluemoon.api")
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from bluemoon.api.audits import router as audits_router
from bluemoon.api.fees import router as fees_router
from bluemoon.api.households import router as households_router
from bluemoon.api.payments import router as payments_router
from bluemoon.api.residency import absences_router, residences_router
from bluemoon.api.residents import router as residents_router
from bluemoon.api.statistics import router as statistics_router
from bluemoon.api.users import router as users_router

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="BlueMoon Apartment Service",
    description="API for managing apartment households, residents, fees and payments.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

DEFAULT_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
]


def _cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or DEFAULT_ORIGINS


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware: any error a handler did not turn into an HTTP response becomes a 500
@app.middleware("http")
async def render_unexpected_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"message": "Server Error"}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse({"message": message}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "header")]
    msg = first.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {msg}" if location else msg


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _describe_validation_error(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse({"message": message}, status_code=status.HTTP_400_BAD_REQUEST)


app.include_router(users_router)
app.include_router(fees_router)
app.include_router(households_router)
app.include_router(residents_router)
app.include_router(payments_router)
app.include_router(statistics_router)
app.include_router(residences_router)
app.include_router(absences_router)
app.include_router(audits_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "bluemoon-service"}

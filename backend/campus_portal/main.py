from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from campus_portal.api.router import api_router
from campus_portal.core.config import settings
from campus_portal.core.database import engine
from campus_portal.core.errors import PortalError, UpstreamFailure, ValidationError
from campus_portal.core.rate_limit import build_rate_limiter
from campus_portal.utils.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

CORS_ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    async with engine.begin() as conn:
        from campus_portal.models import Base  # noqa: F811
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Shutdown
    redis_client = getattr(app.state.rate_limiter, "redis", None)
    if redis_client is not None:
        await redis_client.aclose()
    await engine.dispose()


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

# One limiter per process, shared by every request.
app.state.rate_limiter = build_rate_limiter(
    settings.rate_limit_backend,
    max_requests=settings.rate_limit_max_requests,
    window_seconds=settings.rate_limit_window_seconds,
    redis_url=settings.redis_url,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials="*" not in settings.cors_allowed_origins,
    allow_methods=["*"],
    allow_headers=CORS_ALLOWED_HEADERS,
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
    logger.info("Validation failed on %s: %s", request.url.path, fields)
    return JSONResponse(status_code=400, content={"error": ValidationError.public_message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": UpstreamFailure.public_message})


app.include_router(api_router, prefix="/api")


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}

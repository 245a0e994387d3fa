# app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core import logging_config  # noqa: F401  configures logging on import
from app.core.config import get_settings
from app.core.exceptions import BaseServiceError, RateLimitExceededError
from app.routes import health, shipping, tax
from app.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Startup: rate limiter for the public calculator
    app.state.rate_limiter = RateLimiter.from_url(
        settings.REDIS_URL,
        limit=settings.SHIPPING_RATE_LIMIT,
        window=settings.SHIPPING_RATE_LIMIT_WINDOW
    )
    if app.state.rate_limiter.enabled:
        logger.info(
            f"Rate limiting enabled: {settings.SHIPPING_RATE_LIMIT} requests "
            f"per {settings.SHIPPING_RATE_LIMIT_WINDOW}s"
        )
    else:
        logger.warning("REDIS_URL not set - rate limiting will be disabled")

    try:
        yield  # This is where the app runs
    finally:
        await app.state.rate_limiter.close()


settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan
)

if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Add middleware to handle HTTPS behind proxy
@app.middleware("http")
async def proxy_headers_middleware(request: Request, call_next):
    forwarded_proto = request.headers.get("x-forwarded-proto")
    if forwarded_proto == "https":
        request.scope["scheme"] = "https"
    response = await call_next(request)
    return response


@app.exception_handler(RateLimitExceededError)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceededError):
    return JSONResponse(
        {
            "error": "Too many requests",
            "code": "RATE_LIMIT_EXCEEDED",
            "retryAfter": exc.retry_after
        },
        status_code=429,
        headers={"Retry-After": str(exc.retry_after)}
    )


@app.exception_handler(BaseServiceError)
async def service_error_handler(request: Request, exc: BaseServiceError):
    logger.error(f"Unhandled service error on {request.url.path}: {exc}")
    return JSONResponse({"message": "Internal server error"}, status_code=500)


app.include_router(shipping.router)
app.include_router(tax.router)
app.include_router(health.router)  # Health check should be accessible without auth

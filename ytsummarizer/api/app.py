"""
FastAPI application for the YouTube Transcript Summarizer.
"""

import time
import uuid
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ytsummarizer.config import config
from ytsummarizer.api.routes import get_orchestrator, router
from ytsummarizer.api.schemas import ErrorResponse, HealthCheck, HealthResponse
from ytsummarizer.core.model_loader import ModelHandle
from ytsummarizer.core.orchestrator import SummarizationOrchestrator
from ytsummarizer.main import build_orchestrator, load_model
from ytsummarizer.utils.logger import logging
from ytsummarizer.utils.rate_limit import FixedWindowRateLimiter

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'; script-src 'self' 'unsafe-inline'; style-src 'self' 'unsafe-inline';",
}

# Per-client limit on /api/v1 calls
rate_limiter = FixedWindowRateLimiter(config.RATE_LIMIT_PER_MINUTE, window_seconds=60)

# FastAPI application
app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="An API for summarizing YouTube videos from their captions",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Load the model once and build the orchestrator."""
    handle = load_model()
    app.state.model_handle = handle
    app.state.orchestrator = build_orchestrator(handle)

    if handle.available:
        logging.info(f"Model ready: {handle.path}")
    else:
        logging.info("No model loaded, summaries will use extractive fallback")


@app.on_event("shutdown")
async def shutdown_event():
    """Release the model."""
    handle: ModelHandle = getattr(app.state, "model_handle", None)
    if handle is not None:
        handle.close()


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Middleware to add processing time header to responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    if config.ENABLE_SECURITY_HEADERS:
        response.headers.update(SECURITY_HEADERS)
    return response


@app.middleware("http")
async def limit_request_rate(request: Request, call_next):
    """Middleware rejecting API calls over the per-client rate limit."""
    if request.url.path.startswith(router.prefix):
        client_key = request.client.host if request.client else request.headers.get("host", "unknown")
        if not rate_limiter.hit(client_key):
            error = ErrorResponse(error="Too many requests", request_id=str(uuid.uuid4()))
            logging.warning(f"Rate limit exceeded for {client_key}, RequestId: {error.request_id}")
            return JSONResponse(
                status_code=429,
                content=error.model_dump(mode="json"),
                headers={"Retry-After": str(rate_limiter.retry_after(client_key))},
            )
    return await call_next(request)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions."""
    logging.error(f"Unhandled error on {request.url.path}: {str(exc)}")
    detail = f"An unexpected error occurred: {str(exc)}" if config.DEBUG else "An unexpected error occurred"
    return JSONResponse(status_code=500, content={"detail": detail})


# Include API router
app.include_router(router)


# Root
@app.get("/")
async def root():
    """Root endpoint returning basic API information."""
    return {
        "name": config.APP_NAME,
        "version": config.APP_VERSION,
        "description": "YouTube Transcript Summarizer API",
    }


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health(orchestrator: SummarizationOrchestrator = Depends(get_orchestrator)):
    """Overall health with the state of the summarizer tiers."""
    model_status = "Healthy" if orchestrator.model_available else "Degraded"
    return HealthResponse(
        status="Healthy",
        checks=[
            HealthCheck(name="self", status="Healthy"),
            HealthCheck(
                name="model",
                status=model_status,
                description="Local model loaded" if orchestrator.model_available
                else "No model loaded, using extractive fallback",
            ),
        ],
        model=getattr(app.state, "model_handle", ModelHandle.unavailable()).info(),
    )


@app.get("/health/live", response_model=HealthResponse, tags=["health"])
async def health_live():
    """Liveness check."""
    return HealthResponse(status="Healthy")


@app.get("/health/ready", response_model=HealthResponse, tags=["health"])
async def health_ready(orchestrator: SummarizationOrchestrator = Depends(get_orchestrator)):
    """Readiness check. Ready with or without a model."""
    return HealthResponse(
        status="Healthy",
        details={"summarizer": "ai" if orchestrator.model_available else "heuristic"},
    )

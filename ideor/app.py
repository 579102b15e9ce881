# app.py
import logging
import time
import uuid
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ideor import config
from ideor.debug_api import router as debug_router
from ideor.documents_api import router as documents_router
from ideor.errors import IdeorError
from ideor.ideas_api import router as ideas_router
from ideor.logging_config import request_id_var, setup_logging
from ideor.metrics import BACKEND_ERRORS, HTTP_SERVER_DURATION, REQUESTS_INFLIGHT, metrics
from ideor.projects_api import router as projects_router
from ideor.tasks_api import router as tasks_router

setup_logging()
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"

# --- Initialize and configure FastAPI ---
app = FastAPI(title="Ideor API")


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag the request with an id, echo it back and record latency."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    token = request_id_var.set(request_id)
    metrics.add_gauge(REQUESTS_INFLIGHT, 1)
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        elapsed = time.perf_counter() - start
        metrics.add_gauge(REQUESTS_INFLIGHT, -1)
        metrics.observe(HTTP_SERVER_DURATION, elapsed, {"method": request.method, "status": str(status_code)})
        logger.info(f"{request.method} {request.url.path} -> {status_code} in {elapsed * 1000:.1f}ms")
        request_id_var.reset(token)


# Added after the request middleware so CORS headers wrap every response
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=config.CORS_ORIGIN_REGEX,
    allow_origins=config.CORS_EXTRA_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=config.CORS_EXPOSE_HEADERS,
)


@app.exception_handler(IdeorError)
async def ideor_error_handler(request: Request, exc: IdeorError):
    if exc.status_code >= 500:
        metrics.inc(BACKEND_ERRORS, labels={"type": type(exc).__name__})
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.detail}")
    return JSONResponse({"error": exc.message, "detail": exc.detail}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    metrics.inc(BACKEND_ERRORS, labels={"type": type(exc).__name__})
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse({"error": "Erro interno", "detail": str(exc)}, status_code=500)


# Include routers
app.include_router(projects_router)
app.include_router(tasks_router)
app.include_router(documents_router)
app.include_router(ideas_router)
app.include_router(debug_router)


@app.get("/api/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": config.ENVIRONMENT,
    }


@app.get("/metrics")
async def get_metrics():
    return JSONResponse(metrics.snapshot())

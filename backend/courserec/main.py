"""
Course recommender main application
Serves hybrid and cold-start recommendations over HTTP
"""

from contextlib import asynccontextmanager
from uuid import uuid4
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging
import time

from .core.config import get_settings, validate_configuration
from .core.dependencies import cleanup_resources, get_service_health
from .api.v1 import recommendations
from .models.requests import ErrorResponse, HealthCheckResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration on startup, release the cache pool on shutdown"""
    logger.info(
        f"Starting {settings.app_name} v{settings.app_version} "
        f"({settings.environment.value})"
    )

    try:
        validate_configuration(settings)
    except ValueError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise

    cache_backend = "redis" if settings.redis_url else "memory"
    data_source = settings.dataset_path or "built-in sample catalog"
    logger.info(f"Recommendation cache: {cache_backend}, dataset: {data_source}")

    yield

    logger.info("Shutting down, releasing cache and dataset handles")
    await cleanup_resources()


app = FastAPI(
    title=settings.app_name,
    description="Hybrid course recommendation engine",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag each request with an id and log who asked for what"""
    start_time = time.time()
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    user_id = request.headers.get("X-User-ID", "anonymous")

    logger.info(
        f"Request {request_id}: {request.method} {request.url.path} (user {user_id})"
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"Response {request_id}: {response.status_code} in {process_time:.3f}s"
    )
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Uncaught errors become a JSON ErrorResponse"""
    request_id = request.headers.get("X-Request-ID", "unknown")

    logger.error(
        f"Unhandled exception in request {request_id}: {str(exc)}", exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message=str(exc) if settings.debug else "An unexpected error occurred",
            request_id=request_id,
        ).model_dump(mode="json"),
    )


@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Cache and dataset status; degraded when either is unhealthy"""
    services_health = await get_service_health()

    degraded = any("unhealthy" in s.lower() for s in services_health.values())

    return HealthCheckResponse(
        status="degraded" if degraded else "healthy",
        version=settings.app_version,
        environment=settings.environment.value,
        services=services_health,
    )


app.include_router(
    recommendations.router,
    prefix=settings.api_prefix + "/recommendations",
    tags=["Recommendations"],
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "courserec.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )

"""
app/main.py

Purpose: Application entry point

- Builds the FastAPI app (create_app)
- Loads configuration and logging
- Opens storage and seeds the catalog on startup
- Registers API routes and exception handlers
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import asyncio
import time

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.db.provider import init_storage, close_storage, check_storage_health
from app.db.seed import seed_all
from app.services.session_service import reset_session_store, prune_sessions_periodically
from app.api import auth, users, services, orders, referrals

APP_VERSION = "1.0.0"

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting QuickTech services API...")

    try:
        logger.info("Validating configuration...")
        validate_settings()

        storage = await init_storage()
        reset_session_store()

        if settings.SEED_DEMO_DATA:
            logger.info("Seeding service catalog and demo users...")
            await seed_all(storage)

        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    pruner = asyncio.create_task(prune_sessions_periodically())

    yield  # Application runs here

    # Shutdown
    logger.info("Shutting down QuickTech services API...")

    pruner.cancel()
    try:
        await pruner
    except asyncio.CancelledError:
        pass

    try:
        await close_storage()
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


def create_app() -> FastAPI:
    """
    Builds a fully configured application. Each call returns a fresh app;
    storage and sessions are (re)created when its lifespan starts.
    """
    app = FastAPI(
        title="QuickTech Seva - Citizen Services API",
        description="Ordering platform for government document assistance services",
        version=APP_VERSION,
        lifespan=lifespan,
        debug=settings.DEBUG,
        docs_url="/docs" if settings.is_development else None,  # Disable docs in production
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > 2.0:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    add_exception_handlers(app)

    app.include_router(auth.router, prefix=settings.API_PREFIX, tags=["Auth"])
    app.include_router(users.router, prefix=settings.API_PREFIX, tags=["Users"])
    app.include_router(services.router, prefix=settings.API_PREFIX, tags=["Services"])
    app.include_router(orders.router, prefix=settings.API_PREFIX, tags=["Orders"])
    app.include_router(referrals.router, prefix=settings.API_PREFIX, tags=["Referrals"])

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint - basic info."""
        return {
            "name": "QuickTech Seva API",
            "version": APP_VERSION,
            "description": "Citizen services ordering platform",
            "status": "running",
            "environment": settings.ENVIRONMENT
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.
        Checks storage connectivity.
        """
        healthy = await check_storage_health()
        health_status = {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": time.time(),
            "environment": settings.ENVIRONMENT,
            "version": APP_VERSION,
            "checks": {
                "storage": "healthy" if healthy else "unhealthy",
                "backend": settings.STORAGE_BACKEND,
            }
        }

        status_code = 200 if healthy else 503
        return JSONResponse(content=health_status, status_code=status_code)

    @app.get("/ready", tags=["Health"])
    async def readiness_check():
        """
        Readiness probe - indicates if app is ready to receive traffic.
        """
        if await check_storage_health():
            return {"status": "ready"}
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "storage_unavailable"}
        )

    @app.get("/live", tags=["Health"])
    async def liveness_check():
        """
        Liveness probe - indicates if app is alive.
        """
        return {"status": "alive"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )

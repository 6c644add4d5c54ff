# === backend/app/main.py ===
from fastapi import FastAPI, Request
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from contextlib import asynccontextmanager
from app.api.v1.api import api_router
from app.api.fake.dispatcher import router as fake_router
from app.core.config import settings
from app.core.middleware import ManagementCORSMiddleware
from app.db.database import async_session, create_db_and_tables
from app.services.registry_seed import load_seed_file, seed_registry
import time
import logging

#logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up...")
    await create_db_and_tables()

    if settings.REGISTRY_SEED_FILE:
        projects = load_seed_file(settings.REGISTRY_SEED_FILE)
        async with async_session() as session:
            await seed_registry(session, projects)

    logger.info(f"Mock API mounted at {settings.FAKE_API_PREFIX}")
    yield
    logger.info("Shutting down...")

app = FastAPI(
    lifespan=lifespan,
    title="Fake API Studio",
    description="Serve user-defined mock REST endpoints",
    version=VERSION
)

#middleware security
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

#CORS middleware (the mock API sets its own headers)
app.add_middleware(
    ManagementCORSMiddleware,
    excluded_prefix=settings.FAKE_API_PREFIX,
    allow_origins=settings.cors_origins,
    allow_credentials=bool(settings.FRONTEND_URL),
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,  # 24 hours
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Log slow requests
    if process_time > settings.SLOW_REQUEST_SECONDS:
        logger.warning(f"Slow request: {request.method} {request.url} took {process_time:.2f}s")

    return response

#API router
app.include_router(api_router, prefix="/api/v1")

#mock API
app.include_router(fake_router, prefix=settings.FAKE_API_PREFIX, tags=["Mock API"])

#health check
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": VERSION
    }

#root
@app.get("/")
async def root():
    return {
        "message": "Fake API Studio",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "mock_api": settings.FAKE_API_PREFIX
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )

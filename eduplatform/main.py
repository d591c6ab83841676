import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from eduplatform.api.v1.router import api_router
from eduplatform.clients.eureka_client import register_with_eureka, deregister_from_eureka
from eduplatform.config import get_settings
from eduplatform.db.session import init_db, close_db
from eduplatform.schemas.generic import HealthResponse
from eduplatform.utils.exception_handlers import register_exception_handlers
from eduplatform.utils.log import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator:
    """Lifecycle events"""
    # STARTUP
    logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.environment})")
    await init_db()
    await register_with_eureka()

    yield

    # SHUTDOWN
    logger.info(f"Shutting down {settings.app_name}")
    await deregister_from_eureka()
    await close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Learning platform: diagnostic placement, courses, progress tracking and badges",
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url="/redoc" if settings.environment == "development" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
    }


app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run("eduplatform.main:app", host=settings.app_host, port=settings.app_port)

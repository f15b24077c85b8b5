"""
WSG Check - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wsg_check.api.v1.endpoints import check, health
from wsg_check.config import settings
from wsg_check.logger import logger, set_verbose


@asynccontextmanager
async def lifespan(app: FastAPI):
    set_verbose(settings.VERBOSE)
    logger.info(f"Starting {settings.APP_NAME} {settings.VERSION}...")
    yield


# Create app
app = FastAPI(
    title=settings.APP_NAME,
    description="Static-analysis checker for the W3C Web Sustainability Guidelines",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(check.router, prefix="/api/v1/check")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "docs": "/docs"
    }

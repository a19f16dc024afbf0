"""
FastAPI application entry point for the highlight backend.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.api import highlight

import logging

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Highlight Match Backend",
    description="Fuzzy text matching and combinatorial highlight scoring for document viewers",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(highlight.router, prefix="/api/ai", tags=["Highlight Match"])


@app.on_event("startup")
async def startup_event():
    """Execute on application startup."""
    logger.info("Highlight Match Backend starting...")
    logger.info(f"Port: {settings.PYTHON_BACKEND_PORT}")
    logger.info(f"CORS origins: {settings.allowed_origins_list}")
    logger.info(f"Default preset: {settings.HIGHLIGHT_PRESET}")


@app.on_event("shutdown")
async def shutdown_event():
    """Execute on application shutdown."""
    logger.info("Highlight Match Backend shutting down...")


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "service": "Highlight Match Backend",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/api/ai/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "message": "Highlight backend is running"
    }

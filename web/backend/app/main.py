"""FastAPI application for the JUN document service.

Provides REST API endpoints wrapping the JUN codec for:
- Pass/fail validation of documents against a dialect
- Normalization (decode then canonical re-encode)
- Dialect discovery and JSON Schema export
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jun import __version__
from web.backend.app.routers import dialects, documents

app = FastAPI(
    title="JUN API",
    description=(
        "REST API for JSON UI Notation documents. "
        "Validates and normalizes component trees and publishes the "
        "JSON Schema of every registered dialect."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (allow all origins for development)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(documents.router)
app.include_router(dialects.router)


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "JUN API",
        "version": __version__,
        "description": "JSON UI Notation document service",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}

"""HTTP side of PDF Insight Chat.

Serves the stateless conversion API and the health check. The browser
interface is mounted onto this same application by ``pdf_insight.main``.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdf_insight import __version__
from pdf_insight.api.routes import router as convert_router

logger = logging.getLogger(__name__)


def _allowed_origins() -> list[str]:
    """Origins from ``CORS_ORIGINS`` (comma-separated); any origin if unset."""
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown."""
    logger.info("Starting PDF Insight Chat...")
    yield
    logger.info("Shutting down PDF Insight Chat...")


def create_app() -> FastAPI:
    """Build the API application with CORS and the conversion routes."""
    application = FastAPI(
        title="PDF Insight Chat API",
        description=(
            "Upload a PDF, get a Markdown rendering of its text, and chat with an "
            "assistant that answers only from the document."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # GET /health and POST /convert/pdf are the only cross-origin routes
    application.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_methods=["GET", "POST"],
    )

    application.include_router(convert_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "pdf-insight-chat"}

    return application


app = create_app()

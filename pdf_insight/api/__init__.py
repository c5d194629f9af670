"""FastAPI endpoints for PDF Insight Chat.

Endpoints:
    - GET /health: Service health status
    - POST /convert/pdf: One-shot PDF to Markdown conversion
"""

from pdf_insight.api.app import app, create_app

__all__ = ["app", "create_app"]

"""Command-line entry point for PDF Insight Chat.

Checks the model credentials, then serves the browser interface and the
conversion API from one uvicorn process. Settings come from the environment
and an optional .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def serve() -> None:
    """Mount the NiceGUI page on the API app and block in uvicorn."""
    import uvicorn
    from nicegui import ui

    from pdf_insight.api.app import create_app
    from pdf_insight.ui.app_page import index_page  # noqa: F401 - registers "/"

    app = create_app()
    ui.run_with(
        app,
        title="PDF Insight Chat",
        favicon="📄",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "pdf-insight-secret"),
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Serving PDF Insight Chat on {host}:{port} (API docs at /docs)")
    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def main() -> None:
    """Start the server, or exit with status 1 when no API key is configured."""
    from pdf_insight.agent.service import get_agent_service

    try:
        get_agent_service()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    serve()


if __name__ == "__main__":
    main()

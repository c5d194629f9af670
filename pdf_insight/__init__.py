"""PDF Insight Chat - upload a PDF, read it as Markdown, and ask questions about it.

Combines FastAPI as the host application, Agno for LLM orchestration,
NiceGUI for the browser interface, and Pydantic for data validation.

Components:
    - parsing: PDF text extraction
    - agent: Markdown formatting and document-scoped chat
    - session: Upload/ingestion/chat state machine
    - ui: Web interface (upload, progress, document and chat views)
    - api: HTTP endpoints
    - models: Shared schemas
"""

__version__ = "0.1.0"

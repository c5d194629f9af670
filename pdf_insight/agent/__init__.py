"""Agno agent logic for LLM orchestration.

Responsibilities:
    - Converting extracted PDF text into Markdown
    - Opening chat sessions bound to a single document's text
    - Relaying chat turns and returning replies

Maintains clean separation from the HTTP and UI layers.
"""

from pdf_insight.agent.config import AgentConfig, get_agent_config
from pdf_insight.agent.service import (
    AgentService,
    ChatError,
    ChatSession,
    FormattingError,
    get_agent_service,
)

__all__ = [
    "AgentConfig",
    "AgentService",
    "ChatError",
    "ChatSession",
    "FormattingError",
    "get_agent_config",
    "get_agent_service",
]

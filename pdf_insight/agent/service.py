"""Agno-backed Markdown formatting and document-scoped chat.

The formatter is a single stateless agent shared by every upload. Each chat,
on the other hand, gets its own agent: the document text is baked into the
agent's instructions, and turn history is kept in an in-memory Agno db under
a per-chat session id. Dropping the ChatSession drops the conversation.
"""

import logging
import uuid

from agno.agent import Agent
from agno.db.in_memory import InMemoryDb
from agno.models.openai import OpenAIChat
from agno.run.base import RunStatus

from pdf_insight.agent.config import AgentConfig, get_agent_config

logger = logging.getLogger(__name__)

FORMAT_PROMPT = (
    "Please convert the following text, extracted from a PDF, into well-structured "
    "Markdown. Pay close attention to headings, lists, paragraphs, and any potential "
    "table-like structures. Format it cleanly for readability.\n\n---\n\n{text}"
)

CHAT_INSTRUCTIONS = (
    "You are an intelligent assistant designed to help users with the content of a "
    "PDF document they've uploaded. The full text of the document is provided below. "
    "Your primary role is to answer questions and perform tasks based *only* on this "
    "text. Do not use any external knowledge. If a question cannot be answered from "
    "the provided text, state that the information is not available in the document."
    "\n\n--- DOCUMENT CONTENT ---\n\n{text}\n\n--- END OF DOCUMENT ---"
)

FORMAT_ERROR = "Failed to convert content to Markdown."
CHAT_ERROR = "Failed to get a response from the chat assistant."


class FormattingError(Exception):
    """Raised when the document could not be converted to Markdown."""


class ChatError(Exception):
    """Raised when the chat assistant did not produce a reply."""


class ChatSession:
    """Handle to one document conversation.

    Owned by exactly one document session and never shared; the agent keeps
    the turn history under ``session_id``.
    """

    def __init__(self, agent: Agent, session_id: str | None = None) -> None:
        self.agent = agent
        self.session_id = session_id or str(uuid.uuid4())


class AgentService:
    """Entry point for every LLM call the application makes.

    Wraps Agno with:
    - A shared formatter agent for PDF-to-Markdown conversion
    - One chat agent per uploaded document
    - Error translation into short, user-safe messages
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._formatter = self._create_formatter()

    def _create_model(self, model_id: str) -> OpenAIChat:
        return OpenAIChat(
            id=model_id,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

    def _create_formatter(self) -> Agent:
        return Agent(
            model=self._create_model(self._config.formatter_model),
            description="Converts raw PDF text into clean Markdown.",
            instructions=[
                "Return only the Markdown rendering of the text.",
                "Do not summarize, omit, or invent content.",
            ],
            markdown=True,
        )

    async def convert_to_markdown(self, text: str) -> str:
        """Ask the formatter model for a Markdown rendering of ``text``.

        Output is not deterministic; two calls on the same text may differ.

        Raises:
            FormattingError: If the run raises or ends in error, or the reply is empty.
        """
        try:
            response = await self._formatter.arun(FORMAT_PROMPT.format(text=text))
        except Exception as e:
            logger.error(f"Error converting to Markdown: {e}")
            raise FormattingError(FORMAT_ERROR) from e

        # Agno reports model and transport failures in the run output
        if response.status == RunStatus.error:
            logger.error(f"Formatter run failed: {response.content}")
            raise FormattingError(FORMAT_ERROR)

        content = response.content if isinstance(response.content, str) else ""
        if not content.strip():
            logger.error("Formatter returned an empty response")
            raise FormattingError(FORMAT_ERROR)
        return content

    def start_chat_session(self, text: str) -> ChatSession:
        """Open a conversation restricted to ``text``.

        No network call happens here; the first request goes out with the
        first message.
        """
        agent = Agent(
            model=self._create_model(self._config.chat_model),
            db=InMemoryDb(),
            instructions=CHAT_INSTRUCTIONS.format(text=text),
            # Replay earlier turns so follow-up questions keep their context
            add_history_to_context=True,
            num_history_runs=self._config.num_history_runs,
            markdown=True,
        )
        session = ChatSession(agent=agent)
        logger.info(f"Opened chat session {session.session_id}")
        return session

    async def send_message(self, session: ChatSession, message: str) -> str:
        """Send one user message and return the assistant's reply.

        Raises:
            ChatError: If the run raises or ends in error.
        """
        try:
            response = await session.agent.arun(message, session_id=session.session_id)
        except Exception as e:
            logger.error(f"Error sending message to chat: {e}")
            raise ChatError(CHAT_ERROR) from e

        if response.status == RunStatus.error:
            logger.error(f"Chat run failed in session {session.session_id}: {response.content}")
            raise ChatError(CHAT_ERROR)
        return response.content or ""


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Raises:
        ValidationError: If the configuration is incomplete (no API key).
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service

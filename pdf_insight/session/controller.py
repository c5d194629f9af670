"""Orchestrates ingestion and chat turns for one browser session.

The controller owns a :class:`SessionState`, calls the extractor and the
agent service, and feeds their outcomes back through :func:`reduce`. All
collaborator failures stop here: ingestion errors become the failed state,
chat errors become an apology in the transcript.
"""

import asyncio
import logging
from collections.abc import Callable

from pdf_insight.agent.service import (
    FORMAT_ERROR,
    AgentService,
    FormattingError,
    get_agent_service,
)
from pdf_insight.models.schemas import LifecycleState
from pdf_insight.parsing.pdf_parser import PDFParseError, extract_text
from pdf_insight.session.state import (
    ExtractionDone,
    ExtractionFailed,
    FileSelected,
    FormatDone,
    FormatFailed,
    MessageSent,
    ReplyFailed,
    ReplyReceived,
    Reset,
    SessionEvent,
    SessionOpened,
    SessionOpenFailed,
    SessionState,
    reduce,
)

logger = logging.getLogger(__name__)

UNREADABLE_PDF_ERROR = (
    "Could not parse the PDF file. It might be corrupted or in an unsupported format."
)

Listener = Callable[[SessionState, SessionState], None]


class SessionController:
    """Drives a single document session from upload to chat.

    Args:
        service: Agent service used for formatting and chat.
                 Defaults to the process-wide instance.
        extractor: Callable turning PDF bytes into text. Runs in a worker thread.
    """

    def __init__(
        self,
        service: AgentService | None = None,
        extractor: Callable[[bytes], str] = extract_text,
    ) -> None:
        self._service = service or get_agent_service()
        self._extractor = extractor
        self._listeners: list[Listener] = []
        self.state = SessionState()

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener(previous, current)`` after every state change."""
        self._listeners.append(listener)

    def _dispatch(self, event: SessionEvent) -> SessionState:
        previous = self.state
        self.state = reduce(previous, event)
        if self.state is not previous:
            for listener in self._listeners:
                try:
                    listener(previous, self.state)
                except Exception:
                    logger.exception(f"Session listener failed on {type(event).__name__}")
        return self.state

    def _is_current(self, generation: int) -> bool:
        if self.state.generation != generation:
            logger.info(f"Discarding result for superseded session {generation}")
            return False
        return True

    async def start_ingestion(self, file_name: str, content: bytes) -> SessionState:
        """Extract, format, and open a chat for an uploaded PDF.

        Replaces whatever session was loaded before. Ignored while another
        ingestion is still running.

        Returns:
            The state once this ingestion has finished (or been superseded).
        """
        if self.state.lifecycle is LifecycleState.INGESTING:
            logger.warning(f"Ignoring {file_name}: another document is still processing")
            return self.state

        generation = self._dispatch(FileSelected(file_name=file_name)).generation
        logger.info(f"Processing {file_name} ({len(content)} bytes)")

        try:
            text = await asyncio.to_thread(self._extractor, content)
        except PDFParseError as e:
            logger.warning(f"PDF parse error for {file_name}: {e}")
            return self._dispatch(ExtractionFailed(generation=generation, reason=UNREADABLE_PDF_ERROR))
        except Exception as e:
            logger.error(f"Failed to read {file_name}: {e}")
            return self._dispatch(ExtractionFailed(generation=generation, reason=UNREADABLE_PDF_ERROR))

        if not self._is_current(generation):
            return self.state
        state = self._dispatch(ExtractionDone(generation=generation, text=text))
        if state.lifecycle is LifecycleState.FAILED:
            logger.warning(f"No text could be extracted from {file_name}")
            return state

        try:
            markdown = await self._service.convert_to_markdown(text)
        except FormattingError as e:
            logger.error(f"Formatting failed for {file_name}: {e}")
            return self._dispatch(FormatFailed(generation=generation, reason=str(e)))
        except Exception as e:
            logger.error(f"Formatting failed for {file_name}: {e}")
            return self._dispatch(FormatFailed(generation=generation, reason=FORMAT_ERROR))

        if not self._is_current(generation):
            return self.state
        self._dispatch(FormatDone(generation=generation, markdown=markdown))

        try:
            chat = self._service.start_chat_session(text)
        except Exception as e:
            logger.error(f"Could not open chat for {file_name}: {e}")
            return self._dispatch(
                SessionOpenFailed(generation=generation, reason="Could not start the chat assistant.")
            )

        state = self._dispatch(SessionOpened(generation=generation, chat=chat))
        logger.info(f"Document {file_name} is ready for questions")
        return state

    async def send_message(self, text: str) -> bool:
        """Send a question to the assistant and record the exchange.

        Returns:
            False if the message was rejected (blank, no chat open, or a
            reply already pending), True once the turn has completed.
        """
        text = text.strip()
        state = self.state
        if not text or not state.can_send:
            return False

        generation = state.generation
        chat = state.chat
        self._dispatch(MessageSent(generation=generation, text=text))

        reply: str | None = None
        try:
            reply = await self._service.send_message(chat, text)
        except Exception as e:
            logger.error(f"Chat error: {e}")
        finally:
            if reply is None:
                self._dispatch(ReplyFailed(generation=generation))
            else:
                self._dispatch(ReplyReceived(generation=generation, text=reply))
        return True

    def reset(self) -> SessionState:
        """Drop the current document, chat, and transcript."""
        return self._dispatch(Reset())

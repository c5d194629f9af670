"""Document session state and its transitions.

``SessionState`` is immutable. Every change goes through :func:`reduce`,
which maps one event onto a new state and never performs I/O, so the whole
upload/ingestion/chat lifecycle can be exercised without a UI or a model.

Events raised on behalf of asynchronous work carry the ``generation`` they
were issued under. ``FileSelected`` and ``Reset`` start a new generation, and
any event still tagged with an older one is ignored. This keeps a late reply
or formatter result from leaking into a session the user already left.
"""

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pdf_insight.agent.service import ChatSession
from pdf_insight.models.schemas import LifecycleState, Message, Role

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Failed to process the PDF."
EMPTY_TEXT_ERROR = "Could not extract text from the PDF."
CHAT_ERROR_REPLY = "Sorry, I encountered an error. Please try again."


def greeting(file_name: str) -> str:
    return (
        f'Hello! I\'ve analyzed the document "{file_name}". '
        "Feel free to ask me anything about its content."
    )


class SessionState(BaseModel):
    """Everything known about the currently loaded document.

    Attributes:
        generation: Identity of this document session.
        lifecycle: Current stage (idle, ingesting, ready, failed).
        file_name: Name of the uploaded file.
        raw_text: Text extracted from the PDF; never empty past extraction.
        formatted_content: Markdown rendering of ``raw_text``.
        chat: Conversation handle, present only while ready.
        transcript: Messages exchanged so far, oldest first.
        reply_pending: Whether an assistant reply is being awaited.
        error: User-facing failure message.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    generation: int = 0
    lifecycle: LifecycleState = LifecycleState.IDLE
    file_name: str = ""
    raw_text: str = ""
    formatted_content: str = ""
    chat: ChatSession | None = Field(default=None, exclude=True)
    transcript: tuple[Message, ...] = ()
    reply_pending: bool = False
    error: str = ""

    @property
    def can_send(self) -> bool:
        return (
            self.lifecycle is LifecycleState.READY
            and self.chat is not None
            and not self.reply_pending
        )


class SessionEvent(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class FileSelected(SessionEvent):
    file_name: str


class ExtractionDone(SessionEvent):
    generation: int
    text: str


class ExtractionFailed(SessionEvent):
    generation: int
    reason: str


class FormatDone(SessionEvent):
    generation: int
    markdown: str


class FormatFailed(SessionEvent):
    generation: int
    reason: str


class SessionOpened(SessionEvent):
    generation: int
    chat: ChatSession


class SessionOpenFailed(SessionEvent):
    generation: int
    reason: str


class MessageSent(SessionEvent):
    generation: int
    text: str


class ReplyReceived(SessionEvent):
    generation: int
    text: str


class ReplyFailed(SessionEvent):
    generation: int


class Reset(SessionEvent):
    pass


def _fail(state: SessionState, reason: str) -> SessionState:
    return SessionState(
        generation=state.generation,
        lifecycle=LifecycleState.FAILED,
        file_name=state.file_name,
        error=f"{ERROR_PREFIX} {reason}",
    )


def _on_file_selected(state: SessionState, event: FileSelected) -> SessionState:
    if state.lifecycle is LifecycleState.INGESTING:
        return state
    return SessionState(
        generation=state.generation + 1,
        lifecycle=LifecycleState.INGESTING,
        file_name=event.file_name,
    )


def _on_extraction_done(state: SessionState, event: ExtractionDone) -> SessionState:
    if not event.text.strip():
        return _fail(state, EMPTY_TEXT_ERROR)
    return state.model_copy(update={"raw_text": event.text})


def _on_extraction_failed(state: SessionState, event: ExtractionFailed) -> SessionState:
    return _fail(state, event.reason)


def _on_format_done(state: SessionState, event: FormatDone) -> SessionState:
    if not state.raw_text:
        return state
    return state.model_copy(update={"formatted_content": event.markdown})


def _on_format_failed(state: SessionState, event: FormatFailed) -> SessionState:
    return _fail(state, event.reason)


def _on_session_opened(state: SessionState, event: SessionOpened) -> SessionState:
    if not state.raw_text:
        return state
    return state.model_copy(
        update={
            "lifecycle": LifecycleState.READY,
            "chat": event.chat,
            "transcript": (Message(role=Role.ASSISTANT, text=greeting(state.file_name)),),
        }
    )


def _on_session_open_failed(state: SessionState, event: SessionOpenFailed) -> SessionState:
    return _fail(state, event.reason)


def _on_message_sent(state: SessionState, event: MessageSent) -> SessionState:
    text = event.text.strip()
    if not text or not state.can_send:
        return state
    return state.model_copy(
        update={
            "transcript": (*state.transcript, Message(role=Role.USER, text=text)),
            "reply_pending": True,
        }
    )


def _append_reply(state: SessionState, text: str) -> SessionState:
    if not state.reply_pending:
        return state
    return state.model_copy(
        update={
            "transcript": (*state.transcript, Message(role=Role.ASSISTANT, text=text)),
            "reply_pending": False,
        }
    )


def _on_reply_received(state: SessionState, event: ReplyReceived) -> SessionState:
    return _append_reply(state, event.text)


def _on_reply_failed(state: SessionState, event: ReplyFailed) -> SessionState:
    return _append_reply(state, CHAT_ERROR_REPLY)


def _on_reset(state: SessionState, event: Reset) -> SessionState:
    return SessionState(generation=state.generation + 1)


# Events that only make sense while a document is still being ingested
_INGESTION_EVENTS = (
    ExtractionDone,
    ExtractionFailed,
    FormatDone,
    FormatFailed,
    SessionOpened,
    SessionOpenFailed,
)

_HANDLERS: dict[type[SessionEvent], Callable[[SessionState, Any], SessionState]] = {
    FileSelected: _on_file_selected,
    ExtractionDone: _on_extraction_done,
    ExtractionFailed: _on_extraction_failed,
    FormatDone: _on_format_done,
    FormatFailed: _on_format_failed,
    SessionOpened: _on_session_opened,
    SessionOpenFailed: _on_session_open_failed,
    MessageSent: _on_message_sent,
    ReplyReceived: _on_reply_received,
    ReplyFailed: _on_reply_failed,
    Reset: _on_reset,
}


def reduce(state: SessionState, event: SessionEvent) -> SessionState:
    """Apply ``event`` to ``state`` and return the resulting state.

    Returns ``state`` itself (same object) when the event does not apply:
    a stale generation, an ingestion result outside ingestion, or a message
    that cannot be sent right now.
    """
    generation = getattr(event, "generation", None)
    if generation is not None and generation != state.generation:
        logger.debug(
            f"Ignoring stale {type(event).__name__} "
            f"(generation {generation}, current {state.generation})"
        )
        return state

    if isinstance(event, _INGESTION_EVENTS) and state.lifecycle is not LifecycleState.INGESTING:
        return state

    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unknown session event: {type(event).__name__}")
    return handler(state, event)

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LifecycleState(str, Enum):
    """Stages a document session moves through."""

    IDLE = "idle"
    INGESTING = "ingesting"
    READY = "ready"
    FAILED = "failed"


class Role(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single entry in the chat transcript.

    Attributes:
        role: Who wrote the message.
        text: The message body (Markdown for assistant replies).
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str


class PDFConvertResponse(BaseModel):
    """Response after converting an uploaded PDF to Markdown.

    Attributes:
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        markdown: Markdown rendering of the document text.
    """

    filename: str
    pages: int = Field(ge=0)
    markdown: str

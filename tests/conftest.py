"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_pdf: Builds small, valid PDF files with one text line per page
    - fake_service: In-memory stand-in for AgentService
    - async_client: HTTPX client for API testing, wired to fake_service
"""

import asyncio
from collections.abc import AsyncGenerator, Callable
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from pdf_insight.agent.service import (
    CHAT_ERROR,
    FORMAT_ERROR,
    ChatError,
    ChatSession,
    FormattingError,
    get_agent_service,
)
from pdf_insight.api import app


def build_pdf(page_texts: list[str]) -> bytes:
    """Write a minimal PDF with one Helvetica text line per page.

    An empty string produces a page without any text. Texts must not
    contain parentheses or backslashes.
    """
    page_ids = [4 + 2 * i for i in range(len(page_texts))]
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)

    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(page_texts)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, text in zip(page_ids, page_texts):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[[list[str]], bytes]:
    """Return the PDF builder."""
    return build_pdf


class FakeChat(ChatSession):
    """Chat handle handed out by FakeAgentService; never reaches a model."""

    def __init__(self, text: str) -> None:
        super().__init__(agent=MagicMock())
        self.text = text


class FakeAgentService:
    """Records calls and returns canned results.

    ``format_gate`` and ``reply_gate`` hold the next formatter or chat call
    until the event is set; each gate applies to one call only.
    """

    def __init__(self) -> None:
        self.reply = "The revenue grew 10%."
        self.format_error: Exception | None = None
        self.open_error: Exception | None = None
        self.reply_error: Exception | None = None
        self.format_gate: asyncio.Event | None = None
        self.reply_gate: asyncio.Event | None = None
        self.format_started = asyncio.Event()
        self.reply_started = asyncio.Event()
        self.formatted: list[str] = []
        self.opened: list[FakeChat] = []
        self.sent: list[tuple[FakeChat, str]] = []

    async def convert_to_markdown(self, text: str) -> str:
        self.formatted.append(text)
        self.format_started.set()
        gate, self.format_gate = self.format_gate, None
        if gate is not None:
            await gate.wait()
        if self.format_error is not None:
            raise self.format_error
        return f"# Rendered\n\n{text}"

    def start_chat_session(self, text: str) -> FakeChat:
        if self.open_error is not None:
            raise self.open_error
        chat = FakeChat(text)
        self.opened.append(chat)
        return chat

    async def send_message(self, session: FakeChat, message: str) -> str:
        self.sent.append((session, message))
        self.reply_started.set()
        gate, self.reply_gate = self.reply_gate, None
        if gate is not None:
            await gate.wait()
        if self.reply_error is not None:
            raise self.reply_error
        return self.reply


@pytest.fixture
def fake_service() -> FakeAgentService:
    return FakeAgentService()


@pytest.fixture
def formatting_error() -> FormattingError:
    return FormattingError(FORMAT_ERROR)


@pytest.fixture
def chat_error() -> ChatError:
    return ChatError(CHAT_ERROR)


@pytest.fixture
async def async_client(fake_service: FakeAgentService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    The agent service dependency is replaced by ``fake_service``.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_agent_service] = lambda: fake_service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()

"""Pydantic models shared by the session, API, and UI layers.

Models:
    - LifecycleState: Stages of a document session
    - Role: Transcript message author
    - Message: Individual message in the conversation
    - PDFConvertResponse: Result of the stateless conversion endpoint
"""

from pdf_insight.models.schemas import LifecycleState, Message, PDFConvertResponse, Role

__all__ = ["LifecycleState", "Message", "PDFConvertResponse", "Role"]

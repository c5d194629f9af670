"""Document session state machine.

Responsibilities:
    - Immutable session state and a pure reducer over session events
    - Sequencing extraction, Markdown formatting, and chat opening
    - Routing chat turns through the open session while tracking the transcript
"""

from pdf_insight.session.controller import SessionController
from pdf_insight.session.state import SessionState, reduce

__all__ = ["SessionController", "SessionState", "reduce"]

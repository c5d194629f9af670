"""Test package for PDF Insight Chat.

Structure:
    - unit/: Parser, configuration, agent service, and session state machine
    - integration/: HTTP endpoints through the ASGI app

PDF inputs are generated in-test. Model calls use a fake service unless
OPENAI_API_KEY is set for the live tests.
Leverages pytest with pytest-check for soft assertions.
"""

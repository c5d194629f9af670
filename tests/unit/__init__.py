"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Text extraction and upload validation
    - agent/: Configuration and Agno wiring
    - session/: Reducer transitions and controller orchestration

Uses mocks for external services. Leverages pytest-check for multiple
assertions per test.
"""

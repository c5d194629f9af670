"""Integration tests for the HTTP surface working as a system.

Requests go through the real FastAPI app and PDF parser. The model is
replaced by a fake service except in tests marked as requiring an API key.
"""

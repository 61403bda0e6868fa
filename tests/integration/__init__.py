"""Integration tests for components working together as a system.

Coverage:
    - API endpoints with real HTTP requests through ASGITransport
    - SSE framing of streamed fragments and errors
    - Chat page helpers calling the in-process API
"""

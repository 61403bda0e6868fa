"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming cursor
    - One conversation thread per browser tab
    - Error banner for connection and send failures

Contains minimal business logic. Delegates all operations to the API.
"""

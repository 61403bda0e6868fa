"""FastAPI endpoints for the LangGraph chat relay.

Endpoints:
    - GET /health: Service health status
    - POST /chat/threads: Create a conversation thread
    - POST /chat/stream: Stream an answer as Server-Sent Events
"""

from langgraph_chat.api.app import app, create_app

__all__ = ["app", "create_app"]

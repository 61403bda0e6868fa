"""LangGraph Chat - minimal chat frontend for a remote LangGraph agent.

Combines FastAPI for HTTP streaming, the LangGraph SDK for thread and run
management, NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - service: Session protocol against the LangGraph server
    - api: HTTP endpoints and streaming responses
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"

"""Pydantic models shared by the service layer, the API and the UI.

Models:
    - ThreadInfo: Remote thread id and status
    - HumanInput: Run input payload
    - ChatRequest / ThreadRequest: API request bodies
    - StreamChunk: SSE payload for streamed fragments
"""

from langgraph_chat.models.schemas import (
    ChatRequest,
    HumanInput,
    InputMessage,
    StreamChunk,
    StreamStatus,
    ThreadInfo,
    ThreadRequest,
)

__all__ = [
    "ChatRequest",
    "HumanInput",
    "InputMessage",
    "StreamChunk",
    "StreamStatus",
    "ThreadInfo",
    "ThreadRequest",
]

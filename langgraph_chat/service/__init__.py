"""Access layer for the remote LangGraph agent service.

Implements the message-streaming session protocol.

Responsibilities:
    - Process-wide client with automatic retries disabled
    - Thread lifecycle (create-or-reuse by client-generated id)
    - Run invocation, fresh or resumed from an interrupt
    - Filtering streamed chunks down to user-visible fragments

Knows nothing about HTTP endpoints or rendering.
"""

from langgraph_chat.service.config import ServiceConfig, get_service_config
from langgraph_chat.service.errors import (
    LangGraphServiceError,
    NoAssistantFound,
    ThreadUnavailable,
)
from langgraph_chat.service.process import iter_message, process_message
from langgraph_chat.service.relay import PassThrough, stream_messages
from langgraph_chat.service.session import create_thread, ensure_thread, generate_thread_id

__all__ = [
    "LangGraphServiceError",
    "NoAssistantFound",
    "PassThrough",
    "ServiceConfig",
    "ThreadUnavailable",
    "create_thread",
    "ensure_thread",
    "generate_thread_id",
    "get_service_config",
    "iter_message",
    "process_message",
    "stream_messages",
]

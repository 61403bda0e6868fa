"""Chat endpoints: thread creation and SSE message streaming.

The browser tab owns its thread id; these endpoints are stateless apart
from the LangGraph client they share.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import StreamingResponse

from langgraph_chat.models.schemas import (
    ChatRequest,
    HumanInput,
    StreamChunk,
    StreamStatus,
    ThreadInfo,
    ThreadRequest,
)
from langgraph_chat.service.process import iter_message
from langgraph_chat.service.relay import PassThrough
from langgraph_chat.service.session import create_thread, generate_thread_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

THREAD_CONNECT_DETAIL = "Could not connect to the agent server"


def _sse(chunk: StreamChunk) -> str:
    """Format a chunk as one Server-Sent Event."""
    return f"data: {chunk.model_dump_json()}\n\n"


async def _event_stream(thread_id: str, message: str) -> AsyncGenerator[str]:
    """Relay one chat turn as SSE events.

    Args:
        thread_id: Thread to run on.
        message: The user's message.

    Yields:
        SSE-formatted StreamChunk events, ending with a done chunk.
    """
    yield _sse(
        StreamChunk(content="", done=False, status=StreamStatus.RECEIVED, thread_id=thread_id)
    )

    try:
        async for fragment in iter_message(
            thread_id, HumanInput.from_text(message), PassThrough()
        ):
            yield _sse(StreamChunk(content=fragment, done=False, status=StreamStatus.GENERATING))
    except Exception as e:
        logger.exception(f"Streaming failed for thread {thread_id}")
        yield _sse(StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e)))
        return

    yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))


@router.post("/threads", response_model=ThreadInfo)
async def open_thread(request: ThreadRequest) -> ThreadInfo:
    """Create a thread on the agent server.

    Args:
        request: Optional client-generated thread id.

    Returns:
        The created thread.

    Raises:
        503: The agent server could not be reached or refused the thread.
    """
    thread_id = request.thread_id or generate_thread_id()
    try:
        return await create_thread(thread_id)
    except Exception as e:
        logger.error(f"Failed to create thread {thread_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=THREAD_CONNECT_DETAIL,
        ) from e


@router.post("/stream")
async def stream_chat(request: ChatRequest) -> StreamingResponse:
    """Stream the agent's answer to a message.

    Args:
        request: The message and the thread it belongs to. A thread id is
            generated when omitted.

    Returns:
        ``text/event-stream`` of StreamChunk JSON events.
    """
    thread_id = request.thread_id or generate_thread_id()
    return StreamingResponse(
        _event_stream(thread_id, request.message),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Thread-Id": thread_id},
    )

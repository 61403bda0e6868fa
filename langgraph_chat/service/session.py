"""Thread lifecycle on the LangGraph server.

Thread ids are generated client-side so the UI can name its conversation
before the server has seen it. ``ensure_thread`` reuses a thread when it
exists and creates it otherwise.
"""

import logging
import uuid
from typing import Any

from langgraph_chat.models.schemas import ThreadInfo
from langgraph_chat.service.client import get_client
from langgraph_chat.service.errors import ThreadUnavailable

logger = logging.getLogger(__name__)


def generate_thread_id() -> str:
    """Generate a random UUID4 thread id."""
    return str(uuid.uuid4())


def _thread_info(thread: dict[str, Any]) -> ThreadInfo:
    return ThreadInfo(thread_id=str(thread["thread_id"]), status=thread.get("status") or None)


async def get_thread(thread_id: str) -> ThreadInfo:
    """Fetch a thread by id.

    Raises:
        httpx.HTTPStatusError: If the thread does not exist.
        httpx.HTTPError: On transport failure.
    """
    thread = await get_client().threads.get(str(thread_id))
    return _thread_info(thread)


async def create_thread(thread_id: str) -> ThreadInfo:
    """Create a thread with the given id.

    Raises:
        httpx.HTTPError: On transport or server failure.
    """
    thread = await get_client().threads.create(thread_id=str(thread_id))
    return _thread_info(thread)


async def ensure_thread(thread_id: str) -> ThreadInfo:
    """Return an existing thread or create it.

    Any failure to fetch (missing thread, network error) falls through to a
    single creation attempt. Nothing is retried.

    Args:
        thread_id: Client-generated thread id.

    Returns:
        ThreadInfo with the thread's current status.

    Raises:
        ThreadUnavailable: If both fetch and creation fail.
    """
    thread_id = str(thread_id)
    try:
        info = await get_thread(thread_id)
        logger.info(f"Reusing thread {thread_id} (status={info.status})")
        return info
    except Exception as e:
        logger.warning(f"Thread {thread_id} not found, creating new one: {e}")

    try:
        info = await create_thread(thread_id)
    except Exception as e:
        logger.error(f"Failed to create thread {thread_id}: {e}")
        raise ThreadUnavailable(thread_id) from e

    logger.info(f"Created new thread {thread_id}")
    return info

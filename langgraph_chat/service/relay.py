"""Streaming runs and fragment filtering.

The agent graph emits two interleaved kinds of output over one
``messages-tuple`` channel: an internal "worker" planning trace and the
user-facing answer. A chunk whose ``additional_kwargs.parsed.worker`` is set
marks a segment boundary and toggles the pass-through state, so visibility
alternates between segments. This assumes worker and answer segments
strictly alternate and that the run ends on a visible segment; it has not
been checked against real traces from every graph.

Resumed runs (answering an interrupt) carry no worker markers, and every
non-tool chunk produced by the ``agent`` node is forwarded.
"""

import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any

import httpx

from langgraph_chat.models.schemas import HumanInput
from langgraph_chat.service.client import get_client
from langgraph_chat.service.config import get_service_config
from langgraph_chat.service.errors import NoAssistantFound

logger = logging.getLogger(__name__)

MULTITASK_STRATEGY = "interrupt"
STREAM_MODE = "messages-tuple"
AGENT_NODE = "agent"


@dataclass
class PassThrough:
    """Visibility state for one streaming session.

    Attributes:
        current: Whether fragments are currently forwarded.
    """

    current: bool = False

    def toggle(self) -> None:
        self.current = not self.current

    def reset(self) -> None:
        self.current = False


# Process-wide assistant cache; see invalidate_assistant_id()
_assistant_id: str | None = None


async def get_assistant_id() -> str:
    """Resolve the assistant to run, searching the registry on first use.

    A configured ``LANGGRAPH_ASSISTANT_ID`` wins over the search.

    Returns:
        The assistant id.

    Raises:
        NoAssistantFound: If the registry has no assistants.
    """
    global _assistant_id
    if _assistant_id:
        return _assistant_id

    configured = get_service_config().assistant_id
    if configured:
        _assistant_id = configured
        return _assistant_id

    assistants = await get_client().assistants.search()
    first = assistants[0] if assistants else {}
    assistant_id = first.get("assistant_id") or first.get("assistantId")
    if not assistant_id:
        raise NoAssistantFound("No assistant found")

    _assistant_id = assistant_id
    logger.info(f"Using assistant: {assistant_id}")
    return assistant_id


def invalidate_assistant_id() -> None:
    """Forget the cached assistant id."""
    global _assistant_id
    _assistant_id = None


def _text(content: Any) -> str:
    """Return chunk content as text.

    Strings pass through unchanged. Content-block lists keep their text parts.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text") or "")
        return "".join(parts)
    return ""


def _is_worker_marker(chunk: dict[str, Any]) -> bool:
    parsed = (chunk.get("additional_kwargs") or {}).get("parsed")
    return isinstance(parsed, dict) and bool(parsed.get("worker"))


def _is_stop(chunk: dict[str, Any]) -> bool:
    return (chunk.get("response_metadata") or {}).get("finish_reason") == "stop"


async def relay_fragments(
    thread_id: str,
    input: HumanInput | None,
    *,
    resume: bool = False,
    resume_content: str | None = None,
    pass_through: PassThrough | None = None,
) -> AsyncGenerator[str]:
    """Open a run on a thread and yield the fragments meant for the user.

    Args:
        thread_id: Thread to run on.
        input: New messages for a fresh run.
        resume: Whether the thread is interrupted and should be resumed.
        resume_content: Value handed back to the interrupted graph.
        pass_through: Visibility state, toggled by worker markers. Fresh
            runs forward nothing without it.

    Yields:
        Non-empty content fragments in stream order.

    Raises:
        NoAssistantFound: If no assistant is registered.
        httpx.HTTPError: On transport failure.
    """
    client = get_client()
    assistant_id = await get_assistant_id()
    resuming = resume and bool(resume_content)

    if resuming:
        payload: dict[str, Any] = {"input": None, "command": {"resume": resume_content}}
    else:
        payload = {"input": input.model_dump() if input is not None else None}

    logger.debug(f"Opening run on thread {thread_id} (resume={resuming})")
    try:
        async with aclosing(
            client.runs.stream(
                str(thread_id),
                assistant_id,
                multitask_strategy=MULTITASK_STRATEGY,
                stream_mode=STREAM_MODE,
                **payload,
            )
        ) as stream:
            async for part in stream:
                if part.event != "messages":
                    continue
                chunk, metadata = part.data
                if chunk.get("type") == "tool":
                    continue

                if resuming:
                    if (metadata or {}).get("langgraph_node") == AGENT_NODE:
                        text = _text(chunk.get("content"))
                        if text:
                            yield text
                    continue

                if _is_worker_marker(chunk) and pass_through is not None:
                    pass_through.toggle()

                visible = pass_through is not None and pass_through.current
                if visible and _is_stop(chunk):
                    logger.debug(f"Run on thread {thread_id} reached visible stop")
                    break

                if visible:
                    text = _text(chunk.get("content"))
                    if text:
                        yield text
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            logger.warning(f"Run request returned 404, dropping cached assistant {assistant_id}")
            invalidate_assistant_id()
        raise


async def stream_messages(
    thread_id: str,
    input: HumanInput | None,
    *,
    resume: bool = False,
    resume_content: str | None = None,
    on_fragment: Callable[[str], None] | None = None,
    pass_through: PassThrough | None = None,
) -> None:
    """Run a thread and pass each accepted fragment to ``on_fragment``.

    See ``relay_fragments`` for the filtering rules.
    """
    async for fragment in relay_fragments(
        thread_id,
        input,
        resume=resume,
        resume_content=resume_content,
        pass_through=pass_through,
    ):
        if on_fragment is not None:
            on_fragment(fragment)

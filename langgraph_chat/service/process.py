"""One chat turn: ensure the thread, then stream a fresh or resumed run.

Failures from either step propagate to the caller unchanged.
"""

import logging
from collections.abc import AsyncGenerator, Callable

from langgraph_chat.models.schemas import HumanInput
from langgraph_chat.service.relay import PassThrough, relay_fragments
from langgraph_chat.service.session import ensure_thread

logger = logging.getLogger(__name__)


async def iter_message(
    thread_id: str,
    human_input: HumanInput,
    pass_through: PassThrough | None = None,
) -> AsyncGenerator[str]:
    """Process a chat message and yield the visible response fragments.

    An interrupted thread is resumed with the content of the first input
    message; any other thread status starts a fresh run with the full input.

    Args:
        thread_id: Client-generated thread id.
        human_input: The user's messages.
        pass_through: Visibility state for this turn, reset before use.

    Yields:
        Response fragments in stream order.

    Raises:
        ThreadUnavailable: If the thread cannot be fetched or created.
        NoAssistantFound: If no assistant is registered.
        httpx.HTTPError: On transport failure while streaming.
    """
    if pass_through is not None:
        pass_through.reset()

    thread = await ensure_thread(thread_id)
    is_fresh = not thread.is_interrupted
    logger.info(f"Thread {thread.thread_id} status={thread.status}, fresh={is_fresh}")

    async for fragment in relay_fragments(
        thread.thread_id,
        human_input,
        resume=not is_fresh,
        resume_content=None if is_fresh else human_input.messages[0].content,
        pass_through=pass_through,
    ):
        yield fragment


async def process_message(
    thread_id: str,
    human_input: HumanInput,
    on_fragment: Callable[[str], None] | None = None,
    pass_through: PassThrough | None = None,
) -> None:
    """Process a chat message, handing each fragment to ``on_fragment``.

    Callback form of ``iter_message``.
    """
    async for fragment in iter_message(thread_id, human_input, pass_through):
        if on_fragment is not None:
            on_fragment(fragment)

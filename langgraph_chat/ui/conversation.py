"""Conversation state for one browser tab.

Holds the tab's thread id and message list and is the last line of error
handling: failures while connecting or sending become banner text, never
exceptions.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime

from langgraph_chat.service.session import generate_thread_id

logger = logging.getLogger(__name__)

THREAD_CONNECT_ERROR = "Could not connect to the server. Please check your connection."
SEND_ERROR = "Could not send the message. Please try again."

CreateThread = Callable[[str], Awaitable[object]]
StreamTurn = Callable[[str, str, Callable[[str], None]], Awaitable[None]]


def _now() -> str:
    return datetime.now().strftime("%I:%M %p")


@dataclass
class ChatMessage:
    """A message shown in the chat.

    Attributes:
        role: "human" or "assistant".
        content: Text so far; assistant messages grow while streaming.
        streaming: Whether fragments are still arriving.
        failed: Whether the turn ended with an error.
        time: Display timestamp.
    """

    role: str
    content: str = ""
    streaming: bool = False
    failed: bool = False
    time: str = field(default_factory=_now)


class ChatSession:
    """Manages chat state for a user session."""

    def __init__(self, thread_id: str | None = None) -> None:
        self.messages: list[ChatMessage] = []
        self.thread_id: str = thread_id or generate_thread_id()
        self.is_streaming: bool = False
        self.error: str | None = None

    def add_message(self, role: str, content: str, streaming: bool = False) -> ChatMessage:
        message = ChatMessage(role=role, content=content, streaming=streaming)
        self.messages.append(message)
        return message

    def new_chat(self) -> None:
        self.messages.clear()
        self.thread_id = generate_thread_id()
        self.error = None

    async def connect(self, create: CreateThread) -> bool:
        """Create this session's thread on the server.

        Args:
            create: Coroutine function creating a thread by id.

        Returns:
            True on success; on failure ``error`` holds the banner text.
        """
        try:
            self.error = None
            await create(self.thread_id)
        except Exception:
            logger.exception(f"Error creating thread {self.thread_id}")
            self.error = THREAD_CONNECT_ERROR
            return False
        return True

    async def send(
        self,
        text: str,
        stream: StreamTurn,
        on_change: Callable[[], None] | None = None,
    ) -> ChatMessage | None:
        """Send a message and stream the reply into a new assistant message.

        Fragments already received stay in the reply when the stream fails;
        the reply is then marked failed and ``error`` is set.

        Args:
            text: The user's message.
            stream: Coroutine function ``(text, thread_id, on_fragment)``.
            on_change: Called whenever messages or state change.

        Returns:
            The assistant message, or None if nothing was sent.
        """
        text = text.strip()
        if not text or self.is_streaming:
            return None

        def notify() -> None:
            if on_change is not None:
                on_change()

        self.is_streaming = True
        self.error = None
        self.add_message("human", text)
        reply = self.add_message("assistant", "", streaming=True)
        notify()

        def on_fragment(fragment: str) -> None:
            reply.content += fragment
            notify()

        try:
            await stream(text, self.thread_id, on_fragment)
        except Exception:
            logger.exception(f"Error sending message on thread {self.thread_id}")
            self.error = SEND_ERROR
            reply.failed = True
        finally:
            reply.streaming = False
            self.is_streaming = False
            notify()

        return reply

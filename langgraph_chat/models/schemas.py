from enum import Enum

from pydantic import BaseModel, Field, field_validator

INTERRUPTED = "interrupted"


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    RECEIVED = "received"
    CONNECTING = "connecting"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class ThreadInfo(BaseModel):
    """A remote conversation thread and its last known status.

    Attributes:
        thread_id: Client-generated UUID of the thread.
        status: Server-reported status (idle, busy, interrupted, error) or None.
    """

    thread_id: str
    status: str | None = None

    @property
    def is_interrupted(self) -> bool:
        """Whether the thread is waiting for a resume value."""
        return self.status == INTERRUPTED


class InputMessage(BaseModel):
    """A single message sent as run input."""

    role: str = "human"
    content: str


class HumanInput(BaseModel):
    """Run input payload in the shape the agent graph expects.

    Attributes:
        messages: Messages to append to the thread, at least one.
    """

    messages: list[InputMessage] = Field(..., min_length=1)

    @classmethod
    def from_text(cls, text: str) -> "HumanInput":
        """Wrap user text as a single human message."""
        return cls(messages=[InputMessage(role="human", content=text)])


class ChatRequest(BaseModel):
    """Request payload for the chat streaming endpoint.

    Attributes:
        message: User's question or prompt.
        thread_id: Optional thread for conversation continuity.
    """

    message: str = Field(..., min_length=1)
    thread_id: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ThreadRequest(BaseModel):
    """Request payload for thread creation."""

    thread_id: str | None = None


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status.
        error: Error message if something went wrong.
        thread_id: Thread the turn runs on (sent with the first chunk).
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None
    thread_id: str | None = None

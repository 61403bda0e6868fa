"""Errors raised by the LangGraph service-access layer.

Transport failures (connection errors, HTTP status errors) are not wrapped:
they surface as the ``httpx`` exceptions raised by the SDK.
"""


class LangGraphServiceError(Exception):
    """Base class for session protocol failures."""

    pass


class ThreadUnavailable(LangGraphServiceError):
    """Raised when a thread can neither be fetched nor created."""

    def __init__(self, thread_id: str) -> None:
        super().__init__(f"Unable to fetch or create thread {thread_id}")
        self.thread_id = thread_id


class NoAssistantFound(LangGraphServiceError):
    """Raised when the remote assistant registry is empty."""

    pass

"""LangGraph service configuration with environment variable loading.

Pydantic-based configuration for the remote agent-orchestration service.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ServiceConfig(BaseModel):
    """Configuration for the LangGraph Platform client.

    Attributes:
        api_url: Base URL of the LangGraph server.
        api_key: Optional API key sent as ``x-api-key``.
        assistant_id: Fixed assistant to run. Searched for when unset.
        connect_timeout: Seconds allowed to establish a connection.
        read_timeout: Seconds allowed between streamed bytes.
    """

    api_url: str = Field(
        default_factory=lambda: os.getenv("LANGGRAPH_API_URL", "http://localhost:2024"),
        description="LangGraph server base URL",
    )
    api_key: str | None = Field(
        default_factory=lambda: os.getenv("LANGGRAPH_API_KEY") or None,
        description="API key for the LangGraph server",
    )
    assistant_id: str | None = Field(
        default_factory=lambda: os.getenv("LANGGRAPH_ASSISTANT_ID") or None,
        description="Assistant to invoke (first registered assistant when unset)",
    )
    connect_timeout: float = Field(
        default=5.0,
        ge=0.0,
        description="Connection timeout in seconds",
    )
    read_timeout: float = Field(
        default=300.0,
        ge=0.0,
        description="Read timeout in seconds, long enough for slow agent steps",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate that the server URL is non-empty and drop a trailing slash."""
        if not v or not v.strip():
            raise ValueError("LangGraph URL required. Set LANGGRAPH_API_URL in .env")
        return v.strip().rstrip("/")


def get_service_config() -> ServiceConfig:
    """Create service configuration from environment.

    Returns:
        Configured ServiceConfig instance.

    Raises:
        ValueError: If LANGGRAPH_API_URL is set but blank.
    """
    return ServiceConfig()

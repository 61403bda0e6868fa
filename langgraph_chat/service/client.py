"""Process-wide LangGraph client with automatic retries disabled.

The SDK's own ``get_client`` mounts an httpx transport that retries failed
connections. Retrying a thread-creation request can create the thread twice
on the server, so this module builds the httpx client itself and pins the
transport retry count to ``TRANSPORT_RETRIES``.
"""

import logging

import httpx
from langgraph_sdk.client import LangGraphClient

from langgraph_chat.service.config import ServiceConfig, get_service_config

logger = logging.getLogger(__name__)

# Requests to the LangGraph server are sent exactly once.
TRANSPORT_RETRIES = 0


def build_client(config: ServiceConfig) -> tuple[LangGraphClient, httpx.AsyncClient]:
    """Create a LangGraph client and the httpx client backing it.

    Args:
        config: Service configuration.

    Returns:
        The SDK client and its underlying httpx client (needed for closing).
    """
    headers = {"x-api-key": config.api_key} if config.api_key else {}
    http_client = httpx.AsyncClient(
        base_url=config.api_url,
        transport=httpx.AsyncHTTPTransport(retries=TRANSPORT_RETRIES),
        timeout=httpx.Timeout(
            connect=config.connect_timeout,
            read=config.read_timeout,
            write=config.read_timeout,
            pool=config.connect_timeout,
        ),
        headers=headers,
    )
    return LangGraphClient(http_client), http_client


# Module-level singleton instances
_client: LangGraphClient | None = None
_http_client: httpx.AsyncClient | None = None


def get_client() -> LangGraphClient:
    """Get or create the global LangGraph client.

    Returns:
        The LangGraphClient instance.
    """
    global _client, _http_client
    if _client is None:
        config = get_service_config()
        _client, _http_client = build_client(config)
        logger.info(f"Created LangGraph client for {config.api_url}")
    return _client


async def close_client() -> None:
    """Close the global client and forget it.

    The next ``get_client`` call builds a new one.
    """
    global _client, _http_client
    if _http_client is not None:
        await _http_client.aclose()
    _client = None
    _http_client = None

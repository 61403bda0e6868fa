"""Integration tests for the chat endpoints.

Drives the real FastAPI app through httpx ASGITransport and validates the
SSE protocol. The LangGraph server is replaced by the scripted fake client.
"""

import json

import httpx
import pytest
import pytest_check as check
from httpx import AsyncClient

from langgraph_chat.models.schemas import StreamChunk, StreamStatus
from tests.fakes import FakeLangGraphClient, message_part


async def read_chunks(client: AsyncClient, payload: dict) -> list[StreamChunk]:
    chunks: list[StreamChunk] = []
    async with client.stream("POST", "/chat/stream", json=payload) as response:
        assert response.status_code == 200
        async for line in response.aiter_lines():
            if line.startswith("data: "):
                chunks.append(StreamChunk.model_validate_json(line.removeprefix("data: ")))
    return chunks


class TestHealth:
    async def test_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "langgraph-chat"}


class TestThreadEndpoint:
    """Tests for POST /chat/threads."""

    async def test_creates_thread_with_given_id(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, thread_id: str
    ) -> None:
        response = await async_client.post("/chat/threads", json={"thread_id": thread_id})

        check.equal(response.status_code, 200)
        check.equal(response.json()["thread_id"], thread_id)
        check.equal(fake_client.threads.created, [thread_id])

    async def test_generates_id_when_missing(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient
    ) -> None:
        response = await async_client.post("/chat/threads", json={})

        assert response.status_code == 200
        assert fake_client.threads.created == [response.json()["thread_id"]]

    async def test_unreachable_server_returns_503(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient
    ) -> None:
        fake_client.threads.create_error = httpx.ConnectError("refused")

        response = await async_client.post("/chat/threads", json={})

        assert response.status_code == 503
        assert "detail" in response.json()


class TestStreamingEndpoint:
    """Tests for POST /chat/stream SSE endpoint."""

    async def test_stream_returns_sse_content_type(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, thread_id: str
    ) -> None:
        async with async_client.stream(
            "POST", "/chat/stream", json={"message": "Say hello", "thread_id": thread_id}
        ) as response:
            assert response.status_code == 200
            assert "text/event-stream" in response.headers["content-type"]
            assert response.headers["x-thread-id"] == thread_id

    async def test_chunks_are_valid_json(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, thread_id: str
    ) -> None:
        """Each SSE data line is a StreamChunk JSON document."""
        fake_client.runs.script = [message_part("", worker=True), message_part("Hi")]

        async with async_client.stream(
            "POST", "/chat/stream", json={"message": "Hi", "thread_id": thread_id}
        ) as response:
            async for line in response.aiter_lines():
                if line.startswith("data: "):
                    data = json.loads(line.removeprefix("data: ").strip())
                    chunk = StreamChunk.model_validate(data)
                    assert isinstance(chunk.content, str)
                    assert isinstance(chunk.done, bool)

    async def test_visible_fragments_streamed_in_order(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, thread_id: str
    ) -> None:
        fake_client.runs.script = [
            message_part("thinking..."),
            message_part("", worker=True),
            message_part("Hello"),
            message_part(", world"),
            message_part("", finish_reason="stop"),
        ]

        chunks = await read_chunks(async_client, {"message": "hi", "thread_id": thread_id})

        check.equal(chunks[0].status, StreamStatus.RECEIVED)
        check.equal(chunks[0].thread_id, thread_id)
        check.equal(
            [c.content for c in chunks if c.status == StreamStatus.GENERATING],
            ["Hello", ", world"],
        )
        check.is_true(chunks[-1].done)
        check.equal(chunks[-1].status, StreamStatus.COMPLETE)
        for chunk in chunks[:-1]:
            check.is_false(chunk.done)

    async def test_thread_id_generated_when_missing(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient
    ) -> None:
        chunks = await read_chunks(async_client, {"message": "Hello"})

        assert chunks[0].thread_id
        assert fake_client.threads.created == [chunks[0].thread_id]

    async def test_interrupted_thread_is_resumed(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, thread_id: str
    ) -> None:
        fake_client.threads.store[thread_id] = {"thread_id": thread_id, "status": "interrupted"}
        fake_client.runs.script = [message_part("Done, order placed.")]

        chunks = await read_chunks(async_client, {"message": "yes", "thread_id": thread_id})

        check.equal(fake_client.runs.calls[0]["command"], {"resume": "yes"})
        check.is_in("Done, order placed.", [c.content for c in chunks])

    async def test_transport_failure_ends_with_error_chunk(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, thread_id: str
    ) -> None:
        """Partial fragments are delivered before the error chunk."""
        fake_client.runs.script = [message_part("", worker=True), message_part("Part")]
        fake_client.runs.error = httpx.ReadError("connection reset")

        chunks = await read_chunks(async_client, {"message": "hi", "thread_id": thread_id})

        check.is_in("Part", [c.content for c in chunks])
        check.is_true(chunks[-1].done)
        check.equal(chunks[-1].status, StreamStatus.ERROR)
        check.is_in("connection reset", chunks[-1].error)

    async def test_thread_unavailable_ends_with_error_chunk(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, thread_id: str
    ) -> None:
        fake_client.threads.create_error = httpx.ConnectError("refused")

        chunks = await read_chunks(async_client, {"message": "hi", "thread_id": thread_id})

        assert chunks[-1].status == StreamStatus.ERROR
        assert thread_id in chunks[-1].error

    async def test_each_request_starts_hidden(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, thread_id: str
    ) -> None:
        """Visibility state does not leak between requests."""
        fake_client.runs.script = [message_part("", worker=True), message_part("one")]
        await read_chunks(async_client, {"message": "first", "thread_id": thread_id})

        fake_client.runs.script = [message_part("hidden")]
        chunks = await read_chunks(async_client, {"message": "second", "thread_id": thread_id})

        assert [c.content for c in chunks if c.content] == []


class TestStreamingValidation:
    """Tests for request validation on the streaming endpoint."""

    async def test_empty_message_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/chat/stream", json={"message": ""})

        assert response.status_code == 422
        assert "detail" in response.json()

    async def test_whitespace_only_message_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/chat/stream", json={"message": "   "})

        assert response.status_code == 422

    async def test_missing_message_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/chat/stream", json={})

        assert response.status_code == 422

    async def test_invalid_json_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/chat/stream",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/chat/stream")

        assert response.status_code == 405

    @pytest.mark.parametrize("origin", ["http://localhost:3000", "https://chat.example.com"])
    async def test_cors_headers_present(
        self, async_client: AsyncClient, fake_client: FakeLangGraphClient, origin: str
    ) -> None:
        response = await async_client.get("/health", headers={"Origin": origin})

        assert "access-control-allow-origin" in response.headers

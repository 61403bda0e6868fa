"""NiceGUI chat interface with SSE streaming support."""

import json
import os
from collections.abc import Callable

import httpx
from nicegui import ui

from langgraph_chat.models.schemas import StreamChunk, StreamStatus
from langgraph_chat.ui.conversation import ChatMessage, ChatSession

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


class ChatStreamError(Exception):
    """Raised when the API reports an error chunk."""

    pass


CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: #1f2937; }

    .message-human {
        background: #2563eb;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-failed { border: 1px solid #fca5a5; }

    .cursor { animation: blink 1s step-start infinite; }
    @keyframes blink { 50% { opacity: 0; } }

    .error-banner { background: #fef2f2; color: #991b1b; }
</style>
"""


async def create_remote_thread(thread_id: str) -> None:
    """Ask the API to create the thread for this tab."""
    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.post(
            f"{API_BASE_URL}/chat/threads",
            json={"thread_id": thread_id},
        )
        response.raise_for_status()


async def stream_chat_response(
    message: str,
    thread_id: str,
    on_chunk: Callable[[str], None],
) -> None:
    """Consume SSE stream from /chat/stream endpoint.

    Raises:
        ChatStreamError: If the API reports an error chunk or ends early.
        httpx.HTTPError: On connection or HTTP failure.
    """
    async with (
        httpx.AsyncClient(timeout=httpx.Timeout(30.0, read=None)) as client,
        client.stream(
            "POST",
            f"{API_BASE_URL}/chat/stream",
            json={"message": message, "thread_id": thread_id},
            headers={"Accept": "text/event-stream"},
        ) as response,
    ):
        response.raise_for_status()
        async for line in response.aiter_lines():
            if not line.startswith("data: "):
                continue
            chunk = StreamChunk.model_validate(json.loads(line[6:]))
            if chunk.status == StreamStatus.ERROR or chunk.error:
                raise ChatStreamError(chunk.error or "stream failed")
            if chunk.done:
                return
            if chunk.content:
                on_chunk(chunk.content)

    raise ChatStreamError("stream closed before completion")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_message(msg: ChatMessage) -> None:
        is_human = msg.role == "human"
        align = "justify-end" if is_human else "justify-start"
        bubble = "message-human" if is_human else "message-assistant"
        if msg.failed:
            bubble += " message-failed"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_human:
                        ui.label(msg.content).classes("text-sm whitespace-pre-wrap")
                    else:
                        ui.markdown(msg.content).classes("text-sm")
                        if msg.streaming:
                            ui.label("|").classes("cursor")
                        if msg.failed:
                            ui.icon("error_outline").classes("text-red-500")
                ui.label(msg.time).classes("text-[10px] text-gray-400")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center"):
                    ui.label("Hi! Start a conversation.").classes("text-lg text-gray-400")
            for msg in session.messages:
                render_message(msg)

    async def connect() -> None:
        await session.connect(create_remote_thread)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.is_streaming:
            return
        input_field.value = ""
        send_btn.disable()
        try:
            await session.send(text, stream_chat_response, on_change=refresh_messages)
        finally:
            send_btn.enable()
        if session.error:
            ui.notify(session.error, type="negative")

    async def new_chat() -> None:
        session.new_chat()
        refresh_messages()
        await connect()

    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        banner = ui.row().classes("w-full error-banner px-5 py-2 items-center justify-between")
        with banner.bind_visibility_from(session, "error", backward=bool):
            ui.label().bind_text_from(session, "error", backward=lambda e: e or "")
            ui.button(icon="close", on_click=lambda: setattr(session, "error", None)).props(
                "flat round dense"
            )

        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            ui.label("LangGraph Chatbot").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-3"):
                ui.label("Answering...").classes("text-xs text-white/80").bind_visibility_from(
                    session, "is_streaming"
                )
                ui.label().bind_text_from(
                    session, "thread_id", lambda s: s[:8].upper()
                ).classes("text-xs text-white/80 font-mono")
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            input_field = (
                ui.textarea(placeholder="Type your message...")
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    ui.timer(0.1, connect, once=True)


def main() -> None:
    ui.run(title="LangGraph Chatbot", port=8080, reload=False)


if __name__ in {"__main__", "__mp_main__"}:
    main()

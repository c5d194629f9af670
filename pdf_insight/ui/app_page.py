"""NiceGUI interface: upload, progress, error, and document/chat screens."""

import logging

from nicegui import events, ui

from pdf_insight.models.schemas import LifecycleState, Message, Role
from pdf_insight.parsing.pdf_parser import MAX_FILE_SIZE
from pdf_insight.session.controller import SessionController
from pdf_insight.session.state import SessionState

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f1f5f9; min-height: 100vh; }

    .panel {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .drop-zone .q-uploader { width: 100%; min-height: 16rem; border: 2px dashed #cbd5e1; }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f1f5f9;
        color: #1e293b;
        border-radius: 18px 18px 18px 4px;
    }

    .avatar { background: #e2e8f0; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #94a3b8;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .message-assistant p, .message-user p { margin: 0; }
    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


def render_avatar(role: Role) -> None:
    icon = "person" if role is Role.USER else "smart_toy"
    with ui.element("div").classes("avatar w-8 h-8 rounded-full flex items-center justify-center"):
        ui.icon(icon).classes("text-slate-600 text-lg")


def render_message(message: Message) -> None:
    is_user = message.role is Role.USER
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-assistant"

    with ui.row().classes(f"w-full {align} gap-3 items-start no-wrap"):
        if not is_user:
            render_avatar(message.role)
        with ui.element("div").classes(f"max-w-[80%] px-4 py-3 text-sm {bubble}"):
            ui.markdown(message.text)
        if is_user:
            render_avatar(message.role)


def render_typing_indicator() -> None:
    with ui.row().classes("w-full justify-start gap-3 items-start no-wrap"):
        render_avatar(Role.ASSISTANT)
        with ui.element("div").classes("message-assistant px-4 py-3"):
            with ui.row().classes("gap-1 items-center"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")


@ui.page("/")
def index_page() -> None:
    """Main page. Each browser tab gets its own document session."""
    ui.add_head_html(CUSTOM_CSS)
    controller = SessionController()

    def on_state_change(previous: SessionState, current: SessionState) -> None:
        if previous.lifecycle is not current.lifecycle or previous.generation != current.generation:
            screen.refresh()
        else:
            chat_panel.refresh()

    controller.subscribe(on_state_change)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        await controller.start_ingestion(e.file.name, content)

    def handle_rejected() -> None:
        ui.notify("Only PDF files up to 10MB are accepted", type="negative")

    def render_upload() -> None:
        with ui.column().classes("w-full max-w-2xl mx-auto items-center gap-2 drop-zone"):
            ui.upload(
                label="Click to upload or drag and drop",
                on_upload=handle_upload,
                on_rejected=handle_rejected,
                auto_upload=True,
                max_file_size=MAX_FILE_SIZE,
            ).props('accept="application/pdf,.pdf" flat bordered').classes("w-full")
            ui.label("PDF documents only").classes("text-sm text-slate-500")

    def render_progress(file_name: str) -> None:
        with ui.column().classes("panel w-full max-w-2xl mx-auto items-center p-8 gap-4"):
            ui.spinner(size="3em", color="indigo")
            ui.label(f'Processing "{file_name}"... This may take a moment.').classes(
                "text-lg font-medium text-slate-700"
            )

    def render_error(message: str) -> None:
        with ui.column().classes("panel w-full max-w-2xl mx-auto items-center p-8 gap-4"):
            ui.label("An Error Occurred").classes("text-2xl font-semibold text-red-600")
            ui.label(message).classes("text-slate-600 text-center")
            ui.button("Try Again", on_click=controller.reset).props("unelevated color=indigo")

    @ui.refreshable
    def chat_panel() -> None:
        state = controller.state

        with ui.scroll_area().classes("flex-grow w-full") as scroll:
            with ui.column().classes("w-full p-4 gap-4"):
                for message in state.transcript:
                    render_message(message)
                if state.reply_pending:
                    render_typing_indicator()
        scroll.scroll_to(percent=1.0)

        async def send() -> None:
            text = input_field.value or ""
            if text.strip():
                await controller.send_message(text)

        with ui.row().classes("w-full p-4 gap-3 items-center no-wrap border-t"):
            input_field = (
                ui.input(placeholder="Ask a question about the document...")
                .props("outlined dense rounded")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send)
            )
            send_btn = ui.button(icon="send", on_click=send).props("round unelevated color=indigo")
            if state.reply_pending:
                input_field.disable()
                send_btn.disable()

    def render_result(state: SessionState) -> None:
        with ui.grid(columns="repeat(auto-fit, minmax(24rem, 1fr))").classes("w-full gap-8"):
            with ui.column().classes("gap-4"):
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label("Document Content").classes("text-2xl font-bold text-slate-900")
                    ui.button("Upload New PDF", on_click=controller.reset).props("flat color=indigo")
                with ui.column().classes("panel w-full gap-0").style("height: 70vh"):
                    ui.label(state.file_name).classes(
                        "w-full p-4 border-b bg-slate-50 font-mono text-sm text-slate-600 truncate"
                    )
                    with ui.scroll_area().classes("flex-grow w-full"):
                        ui.markdown(state.formatted_content).classes("p-6")
            with ui.column().classes("gap-4"):
                ui.label("Chat Assistant").classes("text-2xl font-bold text-slate-900")
                with ui.column().classes("panel w-full gap-0").style("height: 70vh"):
                    chat_panel()

    @ui.refreshable
    def screen() -> None:
        state = controller.state
        if state.lifecycle is LifecycleState.INGESTING:
            render_progress(state.file_name)
        elif state.lifecycle is LifecycleState.FAILED:
            render_error(state.error)
        elif state.lifecycle is LifecycleState.READY:
            render_result(state)
        else:
            render_upload()

    with ui.column().classes("w-full max-w-7xl mx-auto p-4 md:p-8 gap-8"):
        with ui.column().classes("w-full items-center gap-2"):
            ui.label("PDF Insight Chat").classes("text-4xl font-bold text-slate-900")
            ui.label(
                "Upload a PDF, see its content as Markdown, and chat with an AI to get answers."
            ).classes("text-lg text-slate-600")
        screen()

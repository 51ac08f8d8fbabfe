from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Input, Static

from store.models import ChatTurn
from views.base_screen import BaseScreen

GREETING = "Hi! I'm Yellow Bot. Ask me about any product in the store."


class ChatBubble(Static):
    def __init__(self, turn: ChatTurn) -> None:
        super().__init__(turn.text, markup=False)
        self.add_class("from-user" if turn.role == "user" else "from-model")


class AssistantScreen(BaseScreen):
    """
    Chat with the store assistant. The conversation lives on the screen;
    the greeting is not sent as history.
    """

    def __init__(self) -> None:
        super().__init__()
        self._history: list[ChatTurn] = []

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield VerticalScroll(id="vertscroll-chat")
        with Horizontal(id="hort-chat-input"):
            yield Input(placeholder="Ask about products...", id="input-chat")
            yield Button("Send", id="btn-send", variant="primary")
            yield Button("Clear", id="btn-clear-chat")

    async def on_mount(self) -> None:
        await self._reset(GREETING)

    async def _reset(self, greeting: str) -> None:
        self._history.clear()
        log = self.query_one("#vertscroll-chat")
        await log.remove_children()
        await log.mount(ChatBubble(ChatTurn("model", greeting)))
        self.query_one("#input-chat").focus()

    async def _append(self, turn: ChatTurn) -> None:
        log = self.query_one("#vertscroll-chat")
        await log.mount(ChatBubble(turn))
        log.scroll_end(animate=False)

    @on(Input.Submitted, "#input-chat")
    @on(Button.Pressed, "#btn-send")
    @work(exclusive=True)
    async def handle_send(self) -> None:
        chat_input = self.query_one("#input-chat", Input)
        text = chat_input.value.strip()
        if not text:
            return
        chat_input.value = ""
        chat_input.disabled = True

        history = list(self._history)
        question = ChatTurn("user", text)
        await self._append(question)
        answer = await self.app.assistant.reply(
            history, text, self.app.state.catalog.products
        )
        reply = ChatTurn("model", answer)
        self._history.extend([question, reply])
        await self._append(reply)

        chat_input.disabled = False
        chat_input.focus()

    @on(Button.Pressed, "#btn-clear-chat")
    async def handle_clear(self) -> None:
        await self._reset("Chat cleared. How can I help?")

"""Advisor chat controller.

Keeps the chat transcript for one user, persisted in a key-value store so it
survives restarts. One request at a time: a send while a reply is pending, or
with blank text, is ignored. A failed request appends an apology bubble
instead of surfacing an error state.
"""

import structlog
from pydantic import TypeAdapter, ValidationError

from pathfinder.core.errors import SyncError
from pathfinder.gateway.chat_client import ChatApiClient
from pathfinder.schemas.chat import ChatMessage, ChatRequest, Content
from pathfinder.storage.kv_store import KeyValueStore
from pathfinder.sync.state import ObservableState

logger = structlog.get_logger()

CHAT_HISTORY_KEY = "chat_messages"

_HISTORY_ADAPTER = TypeAdapter(list[ChatMessage])


class ChatHistoryRepository:
    """Reads and writes the transcript under ``chat_messages``."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> tuple[ChatMessage, ...]:
        raw = self._store.get(CHAT_HISTORY_KEY)
        if raw is None:
            return ()
        try:
            return tuple(_HISTORY_ADAPTER.validate_python(raw))
        except ValidationError:
            logger.warning("chat_history_unreadable", key=CHAT_HISTORY_KEY)
            return ()

    def save(self, messages: tuple[ChatMessage, ...]) -> None:
        self._store.put(
            CHAT_HISTORY_KEY,
            [m.model_dump(by_alias=True) for m in messages],
        )

    def clear(self) -> None:
        self._store.clear()


class AdvisorController:
    """Chat with the career advisor.

    Attributes:
        messages: Transcript in display order.
        is_loading: True while a reply is pending.
    """

    def __init__(
        self,
        client: ChatApiClient,
        history: ChatHistoryRepository,
        user_id: str,
    ) -> None:
        """Initialize and load the saved transcript.

        Args:
            client: Advisor REST client.
            history: Transcript persistence.
            user_id: Sent with every prompt.
        """
        self.client = client
        self.history = history
        self.user_id = user_id
        self.messages: ObservableState[tuple[ChatMessage, ...]] = ObservableState(
            history.load(), name="advisor.messages"
        )
        self.is_loading: ObservableState[bool] = ObservableState(
            False, name="advisor.is_loading"
        )

    def _append(self, message: ChatMessage) -> None:
        updated = (*self.messages.value, message)
        self.messages.set(updated)
        self.history.save(updated)

    async def send_message(self, text: str) -> ChatMessage | None:
        """Send ``text`` and append the reply.

        Args:
            text: User's message.

        Returns:
            The appended reply (or apology), or None if the send was ignored.
        """
        if not text.strip() or self.is_loading.value:
            logger.debug("chat_send_ignored", blank=not text.strip())
            return None

        context = [Content.from_message(m) for m in self.messages.value]
        self._append(ChatMessage(message=text, is_from_user=True))

        self.is_loading.set(True)
        try:
            response = await self.client.send_message(
                ChatRequest(user_id=self.user_id, prompt=text, history=context)
            )
            reply = ChatMessage(message=response.response, is_from_user=False)
            logger.info("chat_reply_received", user_id=self.user_id)
        except SyncError as e:
            logger.warning("chat_send_failed", user_id=self.user_id, error=e.message)
            reply = ChatMessage(
                message=f"Sorry, something went wrong: {e.message}", is_from_user=False
            )
        finally:
            self.is_loading.set(False)

        self._append(reply)
        return reply

    def clear_history(self) -> None:
        self.history.clear()
        self.messages.set(())

"""Multi-turn chat that resends the conversation history each turn."""

from typing import List
import logging
import threading

from rag_toolchain.chains.errors import ChainError
from rag_toolchain.clients.base import BaseChatClient
from rag_toolchain.clients.errors import ProviderError
from rag_toolchain.clients.types import PromptMessage

logger = logging.getLogger(__name__)


class ChatHistoryBuffer:
    """Ordered message history starting with the system prompt."""

    def __init__(self, system_prompt: PromptMessage):
        self._messages = [system_prompt]

    def get_messages(self) -> List[PromptMessage]:
        return list(self._messages)

    def append(self, message: PromptMessage):
        logger.debug("Appending %s message to history", message.role.value)
        self._messages.append(message)


class ChatHistoryChain:
    """
    Chat with memory.

    A turn is recorded only when the chat client answers; a failed turn
    leaves the history unchanged.
    """

    def __init__(self, chat_client: BaseChatClient, system_prompt: PromptMessage):
        self.chat_client = chat_client
        self.history = ChatHistoryBuffer(system_prompt)
        self._lock = threading.Lock()

    def invoke_chain(self, user_message: PromptMessage) -> PromptMessage:
        """
        Send the history plus ``user_message`` and record the exchange.

        Raises:
            ChainError: If the chat client fails
        """
        with self._lock:
            messages = self.history.get_messages() + [user_message]
            try:
                response = self.chat_client.invoke(messages)
            except ProviderError as e:
                raise ChainError(f"chat_client error: {e}") from e

            self.history.append(user_message)
            self.history.append(response)
            return response

"""Single-turn retrieval-augmented generation."""

from typing import Optional
import logging

from rag_toolchain.chains.errors import RagChainError
from rag_toolchain.chains.utils import build_prompt
from rag_toolchain.clients.base import BaseChatClient
from rag_toolchain.clients.errors import ProviderError
from rag_toolchain.clients.types import PromptMessage
from rag_toolchain.retrievers.base import BaseRetriever, RetrieverError

logger = logging.getLogger(__name__)


class BasicRAGChain:
    """
    Answers a user prompt using chunks fetched by a retriever.

    Example:
        chain = BasicRAGChain(chat_client, store.as_retriever(embedding_client),
                              system_prompt=PromptMessage.system("Be concise"))
        reply = chain.invoke_chain(PromptMessage.human("What is pgvector?"), top_k=2)
    """

    def __init__(self, chat_client: BaseChatClient, retriever: BaseRetriever,
                 system_prompt: Optional[PromptMessage] = None):
        self.chat_client = chat_client
        self.retriever = retriever
        self.system_prompt = system_prompt

    def invoke_chain(self, user_message: PromptMessage, top_k: int) -> PromptMessage:
        """
        Retrieve supporting chunks for the message and ask the chat model.

        Args:
            user_message: The user's prompt; its content is the retrieval query
            top_k: Number of supporting chunks to retrieve

        Returns:
            The chat model's reply

        Raises:
            RagChainError: If retrieval or the chat call fails
        """
        try:
            chunks = self.retriever.retrieve(user_message.content, top_k)
        except RetrieverError as e:
            raise RagChainError('retriever', str(e)) from e

        logger.debug("Retrieved %d supporting chunks", len(chunks))
        prompt = build_prompt(user_message, chunks)
        messages = [prompt] if self.system_prompt is None else [self.system_prompt, prompt]

        try:
            return self.chat_client.invoke(messages)
        except ProviderError as e:
            raise RagChainError('chat_client', str(e)) from e

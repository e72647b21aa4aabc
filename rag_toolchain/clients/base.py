"""Client interfaces implemented by embedding and chat providers."""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from rag_toolchain.common.types import Chunk, Embedding
from rag_toolchain.clients.types import PromptMessage


class BaseEmbeddingClient(ABC):
    """Turns chunks into embeddings."""

    @abstractmethod
    def generate_embeddings(self, chunks: Sequence[Chunk]) -> List[Tuple[Chunk, Embedding]]:
        """
        Embed a batch of chunks.

        Args:
            chunks: Chunks to embed

        Returns:
            (chunk, embedding) pairs in the same order as ``chunks``
        """
        pass

    def generate_embedding(self, chunk: Chunk) -> Tuple[Chunk, Embedding]:
        """Embed a single chunk."""
        return self.generate_embeddings([chunk])[0]


class BaseChatClient(ABC):
    """Sends a conversation to a chat model and returns its reply."""

    @abstractmethod
    def invoke(self, messages: Sequence[PromptMessage]) -> PromptMessage:
        pass

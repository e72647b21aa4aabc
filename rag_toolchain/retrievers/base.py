"""Retriever interface: text in, similar chunks out."""

from abc import ABC, abstractmethod
from typing import List
import logging
import time

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.clients.base import BaseEmbeddingClient
from rag_toolchain.clients.errors import ProviderError
from rag_toolchain.common.types import Chunk, Embedding

logger = logging.getLogger(__name__)


class RetrieverError(Exception):
    """Raised when a query cannot be embedded or searched."""
    pass


class BaseRetriever(ABC):
    """Abstract base for all retrievers."""

    @abstractmethod
    def retrieve(self, text: str, top_k: int) -> List[Chunk]:
        """
        Retrieve the chunks most similar to ``text``.

        Args:
            text: Query text
            top_k: Number of chunks to return (positive)

        Returns:
            Up to ``top_k`` chunks, most similar first
        """
        pass


class VectorRetriever(BaseRetriever):
    """
    Retriever that embeds the query and runs a nearest-neighbour search.

    Subclasses implement ``_search``.
    """

    def __init__(self, embedding_client: BaseEmbeddingClient, audit_logger: AuditLogger = None):
        self.embedding_client = embedding_client
        self.audit_logger = audit_logger

    def retrieve(self, text: str, top_k: int) -> List[Chunk]:
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
            raise ValueError(f"top_k must be a positive integer, got {top_k!r}")

        start = time.time()
        try:
            _, embedding = self.embedding_client.generate_embedding(Chunk(text))
        except ProviderError as e:
            raise RetrieverError(f"Embedding client error: {e}") from e

        chunks = self._search(embedding, top_k)

        elapsed_ms = (time.time() - start) * 1000
        logger.debug("Retrieved %d chunks in %.0fms", len(chunks), elapsed_ms)
        if self.audit_logger:
            self.audit_logger.log_query(
                query=text,
                num_results=len(chunks),
                execution_time_ms=elapsed_ms,
                retriever=type(self).__name__,
            )
        return chunks

    @abstractmethod
    def _search(self, embedding: Embedding, top_k: int) -> List[Chunk]:
        pass

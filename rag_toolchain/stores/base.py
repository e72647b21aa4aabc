"""Embedding store interface."""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from rag_toolchain.common.types import Chunk, Embedding


class BaseEmbeddingStore(ABC):
    """Persists (chunk, embedding) pairs for later retrieval."""

    def store(self, pair: Tuple[Chunk, Embedding]):
        """Persist a single pair."""
        self.store_batch([pair])

    @abstractmethod
    def store_batch(self, pairs: Sequence[Tuple[Chunk, Embedding]]):
        """Persist pairs as one unit: either all are written or none."""
        pass

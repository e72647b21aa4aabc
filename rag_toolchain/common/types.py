"""Shared value types passed between chunkers, clients, stores and retrievers."""

from dataclasses import dataclass, replace
from typing import Any, List, Sequence, Tuple


@dataclass(frozen=True)
class Chunk:
    """
    A piece of text prepared for embedding.

    Attributes:
        content: The chunk text
        metadata: JSON-serialisable metadata, None when unset
    """
    content: str
    metadata: Any = None

    def with_metadata(self, metadata: Any) -> "Chunk":
        """Return a copy of this chunk carrying ``metadata``."""
        return replace(self, metadata=metadata)

    def __str__(self) -> str:
        return self.content


@dataclass(frozen=True)
class Embedding:
    """Fixed-length vector produced by an embedding provider."""
    vector: Tuple[float, ...]

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Embedding":
        return cls(tuple(float(v) for v in values))

    def to_list(self) -> List[float]:
        return list(self.vector)

    def __len__(self) -> int:
        return len(self.vector)


Chunks = List[Chunk]

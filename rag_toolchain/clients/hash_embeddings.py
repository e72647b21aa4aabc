"""
Deterministic hash embeddings.

Vectors are derived from SHA256 of the chunk text, so the same text always
maps to the same unit-length vector. They carry no semantic meaning; use
them for offline runs and tests where no provider is reachable.
"""

from typing import List, Sequence, Tuple
import hashlib
import math

from rag_toolchain.clients.base import BaseEmbeddingClient
from rag_toolchain.common.types import Chunk, Embedding


def _l2_normalize(vec: List[float]) -> List[float]:
    norm = math.sqrt(sum(x * x for x in vec)) or 1.0
    return [x / norm for x in vec]


def hash_embedding(text: str, dim: int) -> List[float]:
    """Stable unit-length vector of size ``dim`` for ``text``."""
    out: List[float] = []
    counter = 0
    while len(out) < dim:
        h = hashlib.sha256(f"{counter}|{text}".encode("utf-8", errors="ignore")).digest()
        # Map bytes -> floats in [-1, 1]
        for b in h:
            out.append((b / 127.5) - 1.0)
            if len(out) >= dim:
                break
        counter += 1
    return _l2_normalize(out[:dim])


class HashEmbeddingClient(BaseEmbeddingClient):
    """Embedding client producing hash embeddings of a fixed dimension."""

    def __init__(self, dimensions: int = 1536):
        if dimensions < 1:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self.dimensions = dimensions

    def generate_embeddings(self, chunks: Sequence[Chunk]) -> List[Tuple[Chunk, Embedding]]:
        return [
            (chunk, Embedding.from_sequence(hash_embedding(chunk.content, self.dimensions)))
            for chunk in chunks
        ]

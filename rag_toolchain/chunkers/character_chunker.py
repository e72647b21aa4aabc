"""Character-window chunking for text that does not need token limits."""

from typing import List

from rag_toolchain.common.types import Chunk
from rag_toolchain.chunkers.errors import ChunkOverlapTooLarge
from rag_toolchain.chunkers.token_chunker import _require_int


class CharacterChunker:
    """Chunks text into overlapping windows of characters."""

    __slots__ = ('_chunk_size', '_chunk_overlap')

    def __init__(self, chunk_size: int, chunk_overlap: int):
        """
        Initialize chunker.

        Args:
            chunk_size: Number of characters in each chunk
            chunk_overlap: Number of characters shared by neighbouring chunks

        Raises:
            ChunkOverlapTooLarge: If chunk_overlap >= chunk_size
        """
        _require_int('chunk_size', chunk_size, 1)
        _require_int('chunk_overlap', chunk_overlap, 0)

        if chunk_overlap >= chunk_size:
            raise ChunkOverlapTooLarge(
                "chunk_overlap cannot be greater than or equal to chunk_size"
            )

        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self._chunk_overlap

    def generate_chunks(self, raw_text: str) -> List[Chunk]:
        """Split text into windows of characters. Whitespace is preserved."""
        chunks = []
        step = self._chunk_size - self._chunk_overlap
        i = 0

        while i < len(raw_text):
            end = min(i + self._chunk_size, len(raw_text))
            chunks.append(Chunk(raw_text[i:end]))
            i += step

        return chunks

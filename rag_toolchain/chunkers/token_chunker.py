"""
Token-based text chunking.

Text is split with the embedding model's own tokenizer and a fixed-size
window slides over the tokens. Consecutive chunks share ``chunk_overlap``
tokens, and no chunk is ever longer than the model accepts.
"""

from typing import List
import logging

from rag_toolchain.common.embedding_models import EmbeddingModel, Tokenizer
from rag_toolchain.common.types import Chunk
from rag_toolchain.chunkers.errors import (
    ChunkOverlapTooLarge,
    InvalidChunkSize,
    TokenizationError,
)

logger = logging.getLogger(__name__)


def _require_int(name: str, value: int, minimum: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")


class TokenChunker:
    """Chunks text into overlapping windows of tokens."""

    __slots__ = ('_chunk_size', '_chunk_overlap', '_tokenizer')

    def __init__(self, chunk_size: int, chunk_overlap: int,
                 embedding_model: EmbeddingModel):
        """
        Initialize chunker.

        Args:
            chunk_size: Number of tokens in each chunk
            chunk_overlap: Number of tokens shared by neighbouring chunks
            embedding_model: Model whose token limit and tokenizer are used

        Raises:
            InvalidChunkSize: If chunk_size exceeds the model's max tokens
            ChunkOverlapTooLarge: If chunk_overlap >= chunk_size
            ValueError: If chunk_size is not positive or chunk_overlap is negative
        """
        _require_int('chunk_size', chunk_size, 1)
        _require_int('chunk_overlap', chunk_overlap, 0)

        metadata = embedding_model.metadata()
        self.validate_arguments(chunk_size, chunk_overlap, metadata.max_tokens)

        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._tokenizer = metadata.tokenizer

    @staticmethod
    def validate_arguments(chunk_size: int, chunk_overlap: int, max_chunk_size: int):
        """
        Check chunk parameters against each other and the model limit.

        Raises:
            InvalidChunkSize: If chunk_size > max_chunk_size
            ChunkOverlapTooLarge: If chunk_overlap >= chunk_size
        """
        if chunk_size > max_chunk_size:
            raise InvalidChunkSize(f"Chunk size must be smaller than {max_chunk_size}")

        if chunk_overlap >= chunk_size:
            raise ChunkOverlapTooLarge("Window size must be smaller than chunk size")

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self._chunk_overlap

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    def generate_chunks(self, raw_text: str) -> List[Chunk]:
        """
        Split text into overlapping token windows.

        The window advances by ``chunk_size - chunk_overlap`` tokens, so the
        final chunk may be shorter than ``chunk_size``.

        Args:
            raw_text: Text to chunk

        Returns:
            Chunks in document order; empty when the text has no tokens

        Raises:
            TokenizationError: If the tokenizer cannot segment the text
        """
        tokens = self._tokenizer.tokenize(raw_text)
        if tokens is None:
            raise TokenizationError("Unable to tokenize text")

        chunks = []
        step = self._chunk_size - self._chunk_overlap
        i = 0

        while i < len(tokens):
            end = min(i + self._chunk_size, len(tokens))
            chunks.append(Chunk(''.join(tokens[i:end]).strip()))
            i += step

        logger.debug("Generated %d chunks from %d tokens", len(chunks), len(tokens))
        return chunks

    def __repr__(self) -> str:
        return (f"TokenChunker(chunk_size={self._chunk_size}, "
                f"chunk_overlap={self._chunk_overlap})")

"""
Chunkers split raw text into pieces small enough to embed.

TokenChunker counts in the embedding model's tokens and enforces its
limit; CharacterChunker counts characters.
"""

from rag_toolchain.chunkers.errors import (
    ChunkingError,
    ChunkOverlapTooLarge,
    InvalidChunkSize,
    TokenizationError,
)
from rag_toolchain.chunkers.token_chunker import TokenChunker
from rag_toolchain.chunkers.character_chunker import CharacterChunker

__all__ = [
    'ChunkingError',
    'ChunkOverlapTooLarge',
    'InvalidChunkSize',
    'TokenizationError',
    'TokenChunker',
    'CharacterChunker',
]

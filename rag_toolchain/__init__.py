"""
rag-toolchain: building blocks for retrieval-augmented generation.

Token-bounded chunking, provider clients, vector stores, retrievers and
chains, wired together by an indexing pipeline and a small CLI.
"""

__version__ = '0.1.0'

from rag_toolchain.common.types import Chunk, Chunks, Embedding
from rag_toolchain.common.embedding_models import OpenAIEmbeddingModel
from rag_toolchain.chunkers import (
    CharacterChunker,
    ChunkingError,
    ChunkOverlapTooLarge,
    InvalidChunkSize,
    TokenChunker,
    TokenizationError,
)

__all__ = [
    '__version__',
    'Chunk',
    'Chunks',
    'Embedding',
    'OpenAIEmbeddingModel',
    'CharacterChunker',
    'ChunkingError',
    'ChunkOverlapTooLarge',
    'InvalidChunkSize',
    'TokenChunker',
    'TokenizationError',
]

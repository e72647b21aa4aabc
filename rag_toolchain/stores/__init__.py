"""
Stores persist (chunk, embedding) pairs in a vector database.

Each store can hand out a retriever over the data it holds.
"""

from rag_toolchain.stores.base import BaseEmbeddingStore
from rag_toolchain.stores.chroma_store import ChromaStoreError, ChromaVectorStore
from rag_toolchain.stores.postgres_vector_store import (
    HNSWIndex,
    IVFFlatIndex,
    PostgresVectorError,
    PostgresVectorStore,
)

__all__ = [
    'BaseEmbeddingStore',
    'ChromaStoreError',
    'ChromaVectorStore',
    'HNSWIndex',
    'IVFFlatIndex',
    'PostgresVectorError',
    'PostgresVectorStore',
]

"""
Retrievers bridge an embedding client and a vector store.

They take query text, embed it and return the most similar stored chunks.
"""

from rag_toolchain.retrievers.distance import DistanceFunction
from rag_toolchain.retrievers.base import BaseRetriever, RetrieverError, VectorRetriever
from rag_toolchain.retrievers.postgres_vector_retriever import PostgresVectorRetriever
from rag_toolchain.retrievers.chroma_retriever import ChromaVectorRetriever

__all__ = [
    'DistanceFunction',
    'BaseRetriever',
    'RetrieverError',
    'VectorRetriever',
    'PostgresVectorRetriever',
    'ChromaVectorRetriever',
]

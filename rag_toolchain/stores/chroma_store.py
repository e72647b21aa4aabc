"""Embedding store using Chromadb."""

from typing import Optional, Sequence, Tuple
from pathlib import Path
import hashlib
import json
import logging

import chromadb
from chromadb.errors import ChromaError

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.clients.base import BaseEmbeddingClient
from rag_toolchain.common.embedding_models import EmbeddingModel, model_dimensions
from rag_toolchain.common.types import Chunk, Embedding
from rag_toolchain.retrievers.chroma_retriever import METADATA_KEY, ChromaVectorRetriever
from rag_toolchain.retrievers.distance import DistanceFunction
from rag_toolchain.stores.base import BaseEmbeddingStore

logger = logging.getLogger(__name__)


class ChromaStoreError(Exception):
    """Raised when chromadb rejects a write."""
    pass


class ChromaVectorStore(BaseEmbeddingStore):
    """
    Embedding store backed by a chromadb collection.

    Chunk metadata is kept as a JSON string because chroma only accepts
    flat scalar metadata. Record ids are derived from chunk content and
    metadata, so re-indexing the same chunk overwrites it.
    """

    def __init__(self, collection_name: str, embedding_model: EmbeddingModel,
                 path: Optional[str] = None,
                 distance_function: DistanceFunction = DistanceFunction.COSINE,
                 client=None,
                 audit_logger: Optional[AuditLogger] = None):
        """
        Initialize Chroma store.

        Args:
            collection_name: Collection name
            embedding_model: Model whose dimension the vectors must have
            path: Directory for persistent storage; in-memory when None
            distance_function: Distance used by the collection's HNSW index
            client: Existing chromadb client (overrides ``path``)
            audit_logger: Optional audit logger
        """
        self.collection_name = collection_name
        self.dimensions = model_dimensions(embedding_model)
        self.distance_function = DistanceFunction(distance_function)
        self.audit_logger = audit_logger

        if client is None:
            if path:
                Path(path).mkdir(parents=True, exist_ok=True)
                client = chromadb.PersistentClient(path=path)
            else:
                client = chromadb.EphemeralClient()
        self.client = client

        self.collection = self.client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": self.distance_function.chroma_space},
            embedding_function=None,
        )

    @staticmethod
    def chunk_id(chunk: Chunk) -> str:
        """Stable id for a chunk: SHA256 of its content and metadata."""
        payload = json.dumps([chunk.content, chunk.metadata], sort_keys=True, default=str)
        return hashlib.sha256(payload.encode('utf-8')).hexdigest()

    def store_batch(self, pairs: Sequence[Tuple[Chunk, Embedding]]):
        records = {}
        for chunk, embedding in pairs:
            if len(embedding) != self.dimensions:
                raise ValueError(
                    f"Embedding has {len(embedding)} dimensions, "
                    f"collection expects {self.dimensions}"
                )
            records[self.chunk_id(chunk)] = (chunk, embedding)

        if not records:
            return

        try:
            self.collection.upsert(
                ids=list(records),
                embeddings=[embedding.to_list() for _, embedding in records.values()],
                documents=[chunk.content for chunk, _ in records.values()],
                metadatas=[
                    {METADATA_KEY: json.dumps(chunk.metadata, default=str)}
                    for chunk, _ in records.values()
                ],
            )
        except (ChromaError, ValueError) as e:
            raise ChromaStoreError(f"Upsert error: {e}") from e

        logger.debug("Upserted %d records into %s", len(records), self.collection_name)
        if self.audit_logger:
            self.audit_logger.log_store_write('chroma', self.collection_name, len(records))

    def count(self) -> int:
        return self.collection.count()

    def as_retriever(self, embedding_client: BaseEmbeddingClient) -> ChromaVectorRetriever:
        return ChromaVectorRetriever(
            self.collection,
            embedding_client,
            audit_logger=self.audit_logger,
        )

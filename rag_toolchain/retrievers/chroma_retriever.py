"""Similarity search over a chromadb collection."""

from typing import List
import json

from chromadb.errors import ChromaError

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.clients.base import BaseEmbeddingClient
from rag_toolchain.common.types import Chunk, Embedding
from rag_toolchain.retrievers.base import RetrieverError, VectorRetriever

METADATA_KEY = 'metadata_json'


def decode_metadata(metadata):
    """Recover chunk metadata stored by ChromaVectorStore."""
    if not metadata or METADATA_KEY not in metadata:
        return None
    return json.loads(metadata[METADATA_KEY])


class ChromaVectorRetriever(VectorRetriever):
    """Retriever backed by a ChromaVectorStore collection."""

    def __init__(self, collection, embedding_client: BaseEmbeddingClient,
                 audit_logger: AuditLogger = None):
        super().__init__(embedding_client, audit_logger=audit_logger)
        self.collection = collection

    def _search(self, embedding: Embedding, top_k: int) -> List[Chunk]:
        try:
            results = self.collection.query(
                query_embeddings=[embedding.to_list()],
                n_results=top_k,
                include=['documents', 'metadatas'],
            )
        except (ChromaError, ValueError) as e:
            raise RetrieverError(f"Query error: {e}") from e

        documents = results['documents'][0] if results.get('documents') else []
        metadatas = results['metadatas'][0] if results.get('metadatas') else [None] * len(documents)

        return [
            Chunk(document, decode_metadata(metadata))
            for document, metadata in zip(documents, metadatas)
        ]

"""Tests for vector retrievers."""

import uuid

import chromadb
import psycopg
import pytest

from rag_toolchain.clients import HashEmbeddingClient
from rag_toolchain.clients.base import BaseEmbeddingClient
from rag_toolchain.clients.errors import OpenAIError
from rag_toolchain.common.postgres_sql import select_rows_sql
from rag_toolchain.common.types import Chunk
from rag_toolchain.retrievers import (
    DistanceFunction,
    PostgresVectorRetriever,
    RetrieverError,
)
from rag_toolchain.stores import ChromaVectorStore

from conftest import FakeEmbeddingModel
from test_stores import FakeConnection, FakePool


class BrokenEmbeddingClient(BaseEmbeddingClient):
    def generate_embeddings(self, chunks):
        raise OpenAIError("Server Error: provider down", status_code=500)


class RecordingAudit:
    def __init__(self):
        self.queries = []

    def log_query(self, **kwargs):
        self.queries.append(kwargs)


def test_postgres_retriever_query_and_rows():
    rows = [
        (1, "closest", [0.0] * 4, {"source": "a"}),
        (2, "next", [0.0] * 4, None),
    ]
    pool = FakePool(FakeConnection(rows=rows))
    audit = RecordingAudit()
    retriever = PostgresVectorRetriever(pool, "emb", HashEmbeddingClient(4),
                                        DistanceFunction.COSINE, audit_logger=audit)

    chunks = retriever.retrieve("query text", top_k=2)

    assert chunks == [Chunk("closest", {"source": "a"}), Chunk("next")]
    sql, params = pool.conn.executed[0]
    assert sql == select_rows_sql("emb", "<=>")
    assert params[1] == 2
    assert audit.queries[0]['num_results'] == 2


def test_postgres_retriever_query_error():
    class FailingCursorConnection(FakeConnection):
        def cursor(self):
            raise psycopg.OperationalError("server closed the connection")

    retriever = PostgresVectorRetriever(FakePool(FailingCursorConnection()), "emb",
                                        HashEmbeddingClient(4), DistanceFunction.L2)

    with pytest.raises(RetrieverError, match="Query error") as exc_info:
        retriever.retrieve("q", top_k=1)
    assert isinstance(exc_info.value.__cause__, psycopg.OperationalError)


def test_embedding_failure_is_wrapped():
    retriever = PostgresVectorRetriever(FakePool(), "emb", BrokenEmbeddingClient(), DistanceFunction.L2)

    with pytest.raises(RetrieverError, match="Embedding client error: Server Error: provider down"):
        retriever.retrieve("q", top_k=1)


def test_non_provider_embedding_errors_propagate():
    class BuggyEmbeddingClient(BaseEmbeddingClient):
        def generate_embeddings(self, chunks):
            raise TypeError("unexpected chunk type")

    retriever = PostgresVectorRetriever(FakePool(), "emb", BuggyEmbeddingClient(), DistanceFunction.L2)

    with pytest.raises(TypeError):
        retriever.retrieve("q", top_k=1)


@pytest.mark.parametrize("top_k", [0, -1, 1.5, True, "3"])
def test_top_k_must_be_positive_int(top_k):
    retriever = PostgresVectorRetriever(FakePool(), "emb", HashEmbeddingClient(4), DistanceFunction.L2)

    with pytest.raises(ValueError):
        retriever.retrieve("q", top_k=top_k)


def test_chroma_round_trip():
    embedding_client = HashEmbeddingClient(8)
    store = ChromaVectorStore(
        f"test_{uuid.uuid4().hex}",
        FakeEmbeddingModel(dimensions=8),
        client=chromadb.EphemeralClient(),
    )
    chunks = [
        Chunk("postgres stores vectors", {"document_index": 0}),
        Chunk("chroma is an embedding database", {"document_index": 1}),
        Chunk("tiktoken splits text", None),
    ]
    store.store_batch(embedding_client.generate_embeddings(chunks))

    results = store.as_retriever(embedding_client).retrieve("chroma is an embedding database", top_k=2)

    # Hash embeddings are exact for identical text, so the match ranks first
    assert len(results) == 2
    assert results[0] == chunks[1]

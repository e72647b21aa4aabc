"""Similarity search over a pgvector table."""

from typing import List

import psycopg
from pgvector import Vector

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.clients.base import BaseEmbeddingClient
from rag_toolchain.common.postgres_sql import select_rows_sql, validate_table_name
from rag_toolchain.common.types import Chunk, Embedding
from rag_toolchain.retrievers.base import RetrieverError, VectorRetriever
from rag_toolchain.retrievers.distance import DistanceFunction


class PostgresVectorRetriever(VectorRetriever):
    """
    Retriever backed by a PostgresVectorStore table.

    Usually obtained from ``PostgresVectorStore.as_retriever``.
    """

    def __init__(self, pool, table_name: str, embedding_client: BaseEmbeddingClient,
                 distance_function: DistanceFunction, audit_logger: AuditLogger = None):
        """
        Initialize retriever.

        Args:
            pool: psycopg_pool.ConnectionPool with pgvector registered
            table_name: Table written by the store
            embedding_client: Client used to embed query text
            distance_function: Distance used to rank rows
            audit_logger: Optional audit logger
        """
        super().__init__(embedding_client, audit_logger=audit_logger)
        self.pool = pool
        self.table_name = validate_table_name(table_name)
        self.distance_function = DistanceFunction(distance_function)

    def _search(self, embedding: Embedding, top_k: int) -> List[Chunk]:
        query = select_rows_sql(self.table_name, self.distance_function.sql_operator)

        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, (Vector(embedding.to_list()), top_k))
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise RetrieverError(f"Query error: {e}") from e

        return [Chunk(content, metadata) for _id, content, _embedding, metadata in rows]

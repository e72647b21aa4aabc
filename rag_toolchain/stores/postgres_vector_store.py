"""
Postgres + pgvector embedding store.

Rows live in a table of the form

    id SERIAL PRIMARY KEY, content TEXT, embedding vector(N), metadata JSONB

where N is the dimension of the embedding model. An HNSW or IVFFlat index
can be created alongside the table.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union
import logging

import psycopg
from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool, PoolTimeout
from pgvector import Vector
from pgvector.psycopg import register_vector

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.clients.base import BaseEmbeddingClient
from rag_toolchain.common.embedding_models import EmbeddingModel, model_dimensions
from rag_toolchain.common.postgres_sql import (
    create_index_sql,
    create_table_sql,
    insert_row_sql,
    validate_table_name,
)
from rag_toolchain.common.types import Chunk, Embedding
from rag_toolchain.config import PostgresConfig
from rag_toolchain.retrievers.distance import DistanceFunction
from rag_toolchain.retrievers.postgres_vector_retriever import PostgresVectorRetriever
from rag_toolchain.stores.base import BaseEmbeddingStore

logger = logging.getLogger(__name__)


class PostgresVectorError(Exception):
    """
    Raised when a Postgres operation fails.

    Attributes:
        stage: connection, table_creation, insert or transaction
    """

    STAGES = ('connection', 'table_creation', 'insert', 'transaction')

    def __init__(self, stage: str, cause: Exception):
        super().__init__(f"{stage.replace('_', ' ').capitalize()} error: {cause}")
        self.stage = stage
        self.cause = cause


@dataclass(frozen=True)
class HNSWIndex:
    distance_function: DistanceFunction = DistanceFunction.COSINE


@dataclass(frozen=True)
class IVFFlatIndex:
    distance_function: DistanceFunction = DistanceFunction.COSINE
    lists: int = 100


VectorIndex = Union[HNSWIndex, IVFFlatIndex]


class PostgresVectorStore(BaseEmbeddingStore):
    """Stores embeddings in a pgvector table."""

    def __init__(self, table_name: str, embedding_model: EmbeddingModel,
                 config: Optional[PostgresConfig] = None,
                 index: Optional[VectorIndex] = None,
                 pool=None,
                 audit_logger: Optional[AuditLogger] = None):
        """
        Connect and create the table (and index) if missing.

        Args:
            table_name: Table to write to
            embedding_model: Model whose dimension sizes the vector column
            config: Connection settings; required unless ``pool`` is given
            index: Optional HNSWIndex or IVFFlatIndex
            pool: Existing connection pool with pgvector registered
            audit_logger: Optional audit logger

        Raises:
            PostgresVectorError: If connecting or creating the table fails
            ValueError: If table_name is not a plain identifier
        """
        self.table_name = validate_table_name(table_name)
        self.dimensions = model_dimensions(embedding_model)
        self.index = index
        self.audit_logger = audit_logger

        if pool is None:
            if config is None:
                raise ValueError("Either config or pool must be provided")
            pool = self._connect(config)
        self.pool = pool

        self._create_table()
        if index is not None:
            self._create_index(index)

    @staticmethod
    def _connect(config: PostgresConfig) -> ConnectionPool:
        try:
            pool = ConnectionPool(
                config.connection_string,
                min_size=1,
                max_size=config.max_connections,
                configure=register_vector,
                open=True,
            )
            pool.wait()
        except (psycopg.Error, PoolTimeout) as e:
            raise PostgresVectorError('connection', e) from e

        logger.info("Connected to Postgres at %s/%s", config.host, config.database)
        return pool

    def _execute_ddl(self, sql: str):
        try:
            with self.pool.connection() as conn:
                conn.execute(sql)
        except psycopg.Error as e:
            raise PostgresVectorError('table_creation', e) from e

    def _create_table(self):
        self._execute_ddl(create_table_sql(self.table_name, self.dimensions))

    def _create_index(self, index: VectorIndex):
        distance = DistanceFunction(index.distance_function)
        if isinstance(index, IVFFlatIndex):
            sql = create_index_sql(self.table_name, 'ivfflat', distance.ddl_ops, lists=index.lists)
        else:
            sql = create_index_sql(self.table_name, 'hnsw', distance.ddl_ops)
        self._execute_ddl(sql)

    def _row(self, pair: Tuple[Chunk, Embedding]):
        chunk, embedding = pair
        if len(embedding) != self.dimensions:
            raise ValueError(
                f"Embedding has {len(embedding)} dimensions, table expects {self.dimensions}"
            )
        return chunk.content, Vector(embedding.to_list()), Jsonb(chunk.metadata)

    def store_batch(self, pairs: Sequence[Tuple[Chunk, Embedding]]):
        """
        Insert pairs in a single transaction.

        Raises:
            PostgresVectorError: stage 'insert' if a row is rejected,
                'transaction' if the transaction cannot be opened or committed
        """
        rows = [self._row(pair) for pair in pairs]
        if not rows:
            return

        try:
            with self.pool.connection() as conn:
                with conn.transaction():
                    with conn.cursor() as cur:
                        try:
                            cur.executemany(insert_row_sql(self.table_name), rows)
                        except psycopg.Error as e:
                            raise PostgresVectorError('insert', e) from e
        except psycopg.Error as e:
            raise PostgresVectorError('transaction', e) from e

        logger.debug("Inserted %d rows into %s", len(rows), self.table_name)
        if self.audit_logger:
            self.audit_logger.log_store_write('postgres', self.table_name, len(rows))

    def as_retriever(self, embedding_client: BaseEmbeddingClient,
                     distance_function: Optional[DistanceFunction] = None) -> PostgresVectorRetriever:
        """
        Build a retriever over this table.

        Args:
            embedding_client: Client used to embed query text; should use the
                same model as the stored embeddings
            distance_function: Ranking distance; defaults to the index's

        Raises:
            ValueError: If there is no index and no distance_function
        """
        if distance_function is None:
            if self.index is None:
                raise ValueError("distance_function is required when the store has no index")
            distance_function = self.index.distance_function

        return PostgresVectorRetriever(
            self.pool,
            self.table_name,
            embedding_client,
            distance_function,
            audit_logger=self.audit_logger,
        )

    def close(self):
        self.pool.close()

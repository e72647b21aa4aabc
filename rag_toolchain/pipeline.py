"""
Indexing pipeline: load -> chunk -> embed -> store.

A document that cannot be chunked is recorded in the report and skipped;
provider and store errors abort the run.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
import logging
import time

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.chunkers.errors import ChunkingError
from rag_toolchain.clients.base import BaseEmbeddingClient
from rag_toolchain.common.types import Chunk
from rag_toolchain.loaders.base import BaseLoader
from rag_toolchain.stores.base import BaseEmbeddingStore

logger = logging.getLogger(__name__)


@dataclass
class IndexingReport:
    """Outcome of an indexing run."""
    documents: int = 0
    chunks: int = 0
    empty_chunks: int = 0
    failures: List[Tuple[int, str]] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures


class IndexingPipeline:
    """
    Chunks documents, embeds the chunks in batches and writes them to a store.

    Example:
        chunker = TokenChunker(512, 64, OpenAIEmbeddingModel.TEXT_EMBEDDING_3_SMALL)
        pipeline = IndexingPipeline(chunker, embedding_client, store)
        report = pipeline.index_source(DirectorySource("./docs"))
    """

    def __init__(self, chunker, embedding_client: BaseEmbeddingClient,
                 store: BaseEmbeddingStore, batch_size: int = 100,
                 audit_logger: Optional[AuditLogger] = None):
        """
        Args:
            chunker: Anything with ``generate_chunks(text) -> List[Chunk]``
            embedding_client: Client used to embed chunks
            store: Destination store
            batch_size: Chunks per embedding request and store write
            audit_logger: Optional audit logger
        """
        if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {batch_size!r}")

        self.chunker = chunker
        self.embedding_client = embedding_client
        self.store = store
        self.batch_size = batch_size
        self.audit_logger = audit_logger

    def _chunk_document(self, text: str, source: str,
                        document_index: int) -> Tuple[List[Chunk], int]:
        """Chunk one document. Returns the tagged chunks and the number of empty chunks dropped."""
        chunks = self.chunker.generate_chunks(text)
        if self.audit_logger:
            self.audit_logger.log_chunking(
                source=f"{source}#{document_index}",
                chunk_size=self.chunker.chunk_size,
                chunk_overlap=self.chunker.chunk_overlap,
                num_chunks=len(chunks),
            )
        # Whitespace-only windows strip to "" and are never embedded
        tagged = [
            chunk.with_metadata({
                "source": source,
                "document_index": document_index,
                "chunk_index": chunk_index,
            })
            for chunk_index, chunk in enumerate(chunks)
            if chunk.content
        ]
        skipped = len(chunks) - len(tagged)
        if skipped:
            logger.debug("Dropped %d empty chunks from document %d of %s",
                         skipped, document_index, source)
        return tagged, skipped

    def _flush(self, pending: List[Chunk]) -> int:
        if not pending:
            return 0
        pairs = self.embedding_client.generate_embeddings(pending)
        self.store.store_batch(pairs)
        logger.debug("Stored batch of %d chunks", len(pairs))
        return len(pairs)

    def index_texts(self, texts: Iterable[str], source: str = "inline") -> IndexingReport:
        """
        Index raw document strings.

        Args:
            texts: Documents to index
            source: Label written into every chunk's metadata

        Returns:
            IndexingReport with per-document chunking failures
        """
        start = time.time()
        report = IndexingReport()
        pending: List[Chunk] = []

        for document_index, text in enumerate(texts):
            report.documents += 1
            try:
                chunks, skipped = self._chunk_document(text, source, document_index)
            except ChunkingError as e:
                logger.warning("Skipping document %d of %s: %s", document_index, source, e)
                report.failures.append((document_index, str(e)))
                if self.audit_logger:
                    self.audit_logger.log_error(
                        type(e).__name__, str(e),
                        {"source": source, "document_index": document_index},
                    )
                continue

            report.empty_chunks += skipped
            pending.extend(chunks)
            while len(pending) >= self.batch_size:
                report.chunks += self._flush(pending[:self.batch_size])
                pending = pending[self.batch_size:]

        report.chunks += self._flush(pending)
        report.elapsed_ms = (time.time() - start) * 1000

        logger.info(
            "Indexed %d chunks from %d documents (%d failed) in %.0f ms",
            report.chunks, report.documents, len(report.failures), report.elapsed_ms,
        )
        return report

    def index_source(self, loader: BaseLoader, source: Optional[str] = None) -> IndexingReport:
        """Load every document from ``loader`` and index it."""
        return self.index_texts(loader.load(), source=source or repr(loader))

"""Tests for the indexing pipeline."""

import pytest

from rag_toolchain.chunkers import TokenChunker
from rag_toolchain.clients import HashEmbeddingClient
from rag_toolchain.loaders import SingleFileSource
from rag_toolchain.pipeline import IndexingPipeline
from rag_toolchain.stores.base import BaseEmbeddingStore

from conftest import FakeEmbeddingModel, FailingTokenizer


class MemoryStore(BaseEmbeddingStore):
    def __init__(self):
        self.batches = []

    def store_batch(self, pairs):
        self.batches.append(list(pairs))

    @property
    def chunks(self):
        return [chunk for batch in self.batches for chunk, _ in batch]


class CountingEmbeddingClient(HashEmbeddingClient):
    def __init__(self):
        super().__init__(dimensions=4)
        self.batch_sizes = []

    def generate_embeddings(self, chunks):
        self.batch_sizes.append(len(chunks))
        return super().generate_embeddings(chunks)


class RecordingEmbeddingClient(HashEmbeddingClient):
    def __init__(self):
        super().__init__(dimensions=4)
        self.contents = []

    def generate_embeddings(self, chunks):
        self.contents.extend(c.content for c in chunks)
        return super().generate_embeddings(chunks)


def _pipeline(batch_size=100, tokenizer=None, store=None, client=None):
    chunker = TokenChunker(2, 1, FakeEmbeddingModel(tokenizer=tokenizer, dimensions=4))
    return IndexingPipeline(
        chunker,
        client or HashEmbeddingClient(4),
        store if store is not None else MemoryStore(),
        batch_size=batch_size,
    )


def test_chunks_are_tagged_with_metadata():
    store = MemoryStore()
    report = _pipeline(store=store).index_texts(["a b c", "d e"], source="notes")

    assert report.documents == 2
    assert report.chunks == 5
    assert report.ok
    assert [(c.content, c.metadata) for c in store.chunks] == [
        ("a b", {"source": "notes", "document_index": 0, "chunk_index": 0}),
        ("b c", {"source": "notes", "document_index": 0, "chunk_index": 1}),
        ("c", {"source": "notes", "document_index": 0, "chunk_index": 2}),
        ("d e", {"source": "notes", "document_index": 1, "chunk_index": 0}),
        ("e", {"source": "notes", "document_index": 1, "chunk_index": 1}),
    ]


def test_embeds_and_stores_in_batches():
    store = MemoryStore()
    client = CountingEmbeddingClient()

    report = _pipeline(batch_size=2, store=store, client=client).index_texts(["a b c", "d e"])

    assert report.chunks == 5
    assert client.batch_sizes == [2, 2, 1]
    assert [len(batch) for batch in store.batches] == [2, 2, 1]


def test_chunking_failure_skips_document():
    store = MemoryStore()
    pipeline = _pipeline(tokenizer=FailingTokenizer(), store=store)

    report = pipeline.index_texts(["good text", "BAD text", "more text"])

    assert report.documents == 3
    assert not report.ok
    assert report.failures == [(1, "Unable to tokenize text")]
    assert {c.metadata["document_index"] for c in store.chunks} == {0, 2}


def test_empty_input():
    store = MemoryStore()
    report = _pipeline(store=store).index_texts([])

    assert report.documents == 0
    assert report.chunks == 0
    assert store.batches == []


def test_index_source(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one two three", encoding="utf-8")
    store = MemoryStore()

    report = _pipeline(store=store).index_source(SingleFileSource(str(path)), source="doc")

    assert report.chunks == 3
    assert store.chunks[0].metadata["source"] == "doc"


@pytest.mark.parametrize("batch_size", [0, -5, 1.5])
def test_batch_size_validation(batch_size):
    with pytest.raises(ValueError):
        _pipeline(batch_size=batch_size)


def test_empty_chunks_are_not_embedded():
    store = MemoryStore()
    client = RecordingEmbeddingClient()

    report = _pipeline(store=store, client=client).index_texts(["alpha beta   \n\n", "  \n  "])

    assert client.contents == ["alpha beta", "beta"]
    assert [c.content for c in store.chunks] == ["alpha beta", "beta"]
    assert report.chunks == 2
    assert report.empty_chunks == 2
    assert report.ok

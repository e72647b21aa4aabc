"""
Pytest configuration and fixtures.

Ensures rag_toolchain package can be imported from tests.
"""

import sys
import os
import re
from pathlib import Path

import pytest

# Add the repository root to Python path so tests can import rag_toolchain
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

# Also set PYTHONPATH environment variable
os.environ['PYTHONPATH'] = str(repo_root)

from rag_toolchain.common.embedding_models import (  # noqa: E402
    EmbeddingModel,
    EmbeddingModelMetadata,
    Tokenizer,
)


class WordTokenizer(Tokenizer):
    """Splits text the way BPE does for plain English: each word keeps its leading space."""

    _TOKEN = re.compile(r'\s*\S+|\s+')

    def tokenize(self, text):
        return self._TOKEN.findall(text)


class FailingTokenizer(Tokenizer):
    """Fails on any text containing 'BAD'."""

    def __init__(self):
        self.calls = 0

    def tokenize(self, text):
        self.calls += 1
        if 'BAD' in text:
            return None
        return WordTokenizer().tokenize(text)


class FakeEmbeddingModel(EmbeddingModel):
    def __init__(self, tokenizer=None, max_tokens=8192, dimensions=8):
        self.tokenizer = tokenizer or WordTokenizer()
        self.max_tokens = max_tokens
        self.dimensions = dimensions
        self.metadata_calls = 0

    def metadata(self):
        self.metadata_calls += 1
        return EmbeddingModelMetadata(
            dimensions=self.dimensions,
            max_tokens=self.max_tokens,
            tokenizer=self.tokenizer,
        )


@pytest.fixture
def word_model():
    return FakeEmbeddingModel()


@pytest.fixture
def failing_model():
    return FakeEmbeddingModel(tokenizer=FailingTokenizer())


@pytest.fixture
def cl100k():
    """Skip when the cl100k_base tables cannot be loaded (no network, no cache)."""
    tiktoken = pytest.importorskip("tiktoken")
    try:
        return tiktoken.get_encoding("cl100k_base")
    except Exception as e:
        pytest.skip(f"cl100k_base unavailable: {e}")


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep tests away from a developer's config file and the cached config."""
    from rag_toolchain import config as config_module

    monkeypatch.setenv("RAG_TOOLCHAIN_CONFIG", str(tmp_path / "missing-config.yaml"))
    monkeypatch.setattr(config_module, "_config_instance", None)

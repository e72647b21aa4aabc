"""Types and embedding-model metadata shared across the toolchain."""

from rag_toolchain.common.types import Chunk, Chunks, Embedding
from rag_toolchain.common.embedding_models import (
    EmbeddingModel,
    EmbeddingModelMetadata,
    OpenAIEmbeddingModel,
    TiktokenTokenizer,
    Tokenizer,
    model_dimensions,
)

__all__ = [
    'Chunk',
    'Chunks',
    'Embedding',
    'EmbeddingModel',
    'EmbeddingModelMetadata',
    'OpenAIEmbeddingModel',
    'TiktokenTokenizer',
    'Tokenizer',
    'model_dimensions',
]

"""
Embedding model variants and their tokenizers.

Each model exposes metadata describing the vectors it produces and the
token ceiling for a single input, together with a tokenizer that splits
text the same way the provider does. Chunkers count tokens with it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import logging

import tiktoken

logger = logging.getLogger(__name__)


class Tokenizer(ABC):
    """Splits text into an ordered list of token strings."""

    @abstractmethod
    def tokenize(self, text: str) -> Optional[List[str]]:
        """
        Tokenize ``text``.

        Concatenating the returned tokens in order reproduces ``text``.

        Returns:
            List of token strings, or None if the tokenizer could not
            segment the text
        """
        pass


class TiktokenTokenizer(Tokenizer):
    """Byte-pair-encoding tokenizer backed by tiktoken."""

    def __init__(self, encoding_name: str):
        self.encoding_name = encoding_name
        self._encoding = tiktoken.get_encoding(encoding_name)

    def tokenize(self, text: str) -> Optional[List[str]]:
        try:
            token_ids = self._encoding.encode(text, allowed_special="all")
            # A token may hold part of a multi-byte character; such a
            # token has no string form of its own.
            return [
                self._encoding.decode_single_token_bytes(token_id).decode("utf-8")
                for token_id in token_ids
            ]
        except (UnicodeDecodeError, ValueError, KeyError) as e:
            logger.debug("%s could not tokenize text: %s", self.encoding_name, e)
            return None


@dataclass(frozen=True)
class EmbeddingModelMetadata:
    """Limits and tokenizer for one embedding model."""
    dimensions: int
    max_tokens: int
    tokenizer: Tokenizer


class EmbeddingModel(ABC):
    """Anything that can describe itself with EmbeddingModelMetadata."""

    @abstractmethod
    def metadata(self) -> EmbeddingModelMetadata:
        pass


# model id -> (dimensions, max_tokens, tiktoken encoding)
_OPENAI_MODEL_SPECS = {
    "text-embedding-ada-002": (1536, 8192, "cl100k_base"),
    "text-embedding-3-small": (1536, 8191, "cl100k_base"),
    "text-embedding-3-large": (3072, 8191, "cl100k_base"),
}


class OpenAIEmbeddingModel(str, Enum):
    """OpenAI embedding models. The value is the id sent to the API."""

    TEXT_EMBEDDING_ADA_002 = "text-embedding-ada-002"
    TEXT_EMBEDDING_3_SMALL = "text-embedding-3-small"
    TEXT_EMBEDDING_3_LARGE = "text-embedding-3-large"

    @property
    def dimensions(self) -> int:
        return _OPENAI_MODEL_SPECS[self.value][0]

    @property
    def max_tokens(self) -> int:
        return _OPENAI_MODEL_SPECS[self.value][1]

    @property
    def encoding_name(self) -> str:
        return _OPENAI_MODEL_SPECS[self.value][2]

    def metadata(self) -> EmbeddingModelMetadata:
        return EmbeddingModelMetadata(
            dimensions=self.dimensions,
            max_tokens=self.max_tokens,
            tokenizer=TiktokenTokenizer(self.encoding_name),
        )


EmbeddingModel.register(OpenAIEmbeddingModel)


def model_dimensions(embedding_model: EmbeddingModel) -> int:
    """Vector dimension of ``embedding_model``, avoiding tokenizer setup where possible."""
    dimensions = getattr(embedding_model, 'dimensions', None)
    if isinstance(dimensions, int):
        return dimensions
    return embedding_model.metadata().dimensions

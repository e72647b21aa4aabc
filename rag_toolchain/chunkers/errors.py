"""Errors raised while configuring a chunker or generating chunks."""


class ChunkingError(ValueError):
    """Base class for chunking failures."""
    pass


class InvalidChunkSize(ChunkingError):
    """Chunk size exceeds the embedding model's token limit."""
    pass


class ChunkOverlapTooLarge(ChunkingError):
    """Chunk overlap is not strictly smaller than the chunk size."""
    pass


class TokenizationError(ChunkingError):
    """The tokenizer could not segment the input text."""
    pass

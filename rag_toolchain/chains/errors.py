"""Errors raised by chains. The underlying failure is kept as ``__cause__``."""


class ChainError(Exception):
    """The chat client failed while running a chain."""
    pass


class RagChainError(ChainError):
    """
    A RAG chain step failed.

    Attributes:
        source: 'retriever' or 'chat_client'
    """

    def __init__(self, source: str, message: str):
        super().__init__(f"{source} error: {message}")
        self.source = source

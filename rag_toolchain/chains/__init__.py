"""
Chains compose clients and retrievers into common GenAI workflows.
"""

from rag_toolchain.chains.errors import ChainError, RagChainError
from rag_toolchain.chains.utils import build_prompt
from rag_toolchain.chains.basic_rag_chain import BasicRAGChain
from rag_toolchain.chains.chat_history_chain import ChatHistoryBuffer, ChatHistoryChain

__all__ = [
    'ChainError',
    'RagChainError',
    'build_prompt',
    'BasicRAGChain',
    'ChatHistoryBuffer',
    'ChatHistoryChain',
]

"""
Clients for embedding and chat providers.

Every client takes its credentials as an explicit config object and maps
provider failures to a ProviderError subclass.
"""

from rag_toolchain.clients.types import PromptMessage, Role
from rag_toolchain.clients.base import BaseChatClient, BaseEmbeddingClient
from rag_toolchain.clients.errors import AnthropicError, OpenAIError, ProviderError
from rag_toolchain.clients.openai_client import (
    OpenAIChatCompletionClient,
    OpenAIEmbeddingClient,
    OpenAIModel,
)
from rag_toolchain.clients.anthropic_client import (
    AnthropicChatCompletionClient,
    AnthropicModel,
)
from rag_toolchain.clients.hash_embeddings import HashEmbeddingClient

__all__ = [
    'PromptMessage',
    'Role',
    'BaseChatClient',
    'BaseEmbeddingClient',
    'ProviderError',
    'OpenAIError',
    'AnthropicError',
    'OpenAIChatCompletionClient',
    'OpenAIEmbeddingClient',
    'OpenAIModel',
    'AnthropicChatCompletionClient',
    'AnthropicModel',
    'HashEmbeddingClient',
]

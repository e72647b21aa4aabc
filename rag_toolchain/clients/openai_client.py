"""OpenAI embeddings and chat completions over the REST API."""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import time

import requests

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.clients.base import BaseChatClient, BaseEmbeddingClient
from rag_toolchain.clients.errors import OpenAIError
from rag_toolchain.clients.http_client import JsonHttpClient
from rag_toolchain.clients.types import PromptMessage, Role
from rag_toolchain.common.embedding_models import OpenAIEmbeddingModel
from rag_toolchain.common.types import Chunk, Embedding
from rag_toolchain.config import OpenAIConfig

logger = logging.getLogger(__name__)


class OpenAIModel(str, Enum):
    GPT_4 = "gpt-4"
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_3_5_TURBO = "gpt-3.5-turbo"


_ROLE_TO_OPENAI = {
    Role.SYSTEM: "system",
    Role.HUMAN: "user",
    Role.AI: "assistant",
}
_OPENAI_TO_ROLE = {value: key for key, value in _ROLE_TO_OPENAI.items()}


class OpenAIHttpClient(JsonHttpClient):
    """Bearer-authenticated transport for api.openai.com."""

    error_class = OpenAIError

    def __init__(self, config: OpenAIConfig,
                 audit_logger: Optional[AuditLogger] = None,
                 session: Optional[requests.Session] = None):
        self.config = config
        super().__init__(timeout=config.timeout, audit_logger=audit_logger, session=session)

    def _auth_headers(self) -> Dict[str, str]:
        return {'Authorization': f"Bearer {self.config.api_key}"}

    def url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"


class OpenAIEmbeddingClient(BaseEmbeddingClient):
    """Embeds chunks with an OpenAI embedding model."""

    def __init__(self, embedding_model: OpenAIEmbeddingModel, config: OpenAIConfig,
                 audit_logger: Optional[AuditLogger] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize embedding client.

        Args:
            embedding_model: Model to embed with
            config: API key and endpoint settings
            audit_logger: Optional audit logger
            session: Optional requests session
        """
        self.embedding_model = OpenAIEmbeddingModel(embedding_model)
        self.client = OpenAIHttpClient(config, audit_logger=audit_logger, session=session)
        self.url = self.client.url("embeddings")

    def generate_embeddings(self, chunks: Sequence[Chunk]) -> List[Tuple[Chunk, Embedding]]:
        chunks = list(chunks)
        if not chunks:
            return []

        body = {
            'input': [chunk.content for chunk in chunks],
            'model': self.embedding_model.value,
        }
        response = self.client.send_request(body, self.url)
        return self._pair_embeddings(chunks, response)

    @staticmethod
    def _pair_embeddings(chunks: List[Chunk],
                         response: Dict[str, Any]) -> List[Tuple[Chunk, Embedding]]:
        """
        Zip the input chunks with the returned vectors.

        The API tags each vector with the index of its input; results are
        put back in input order before pairing.
        """
        try:
            data = sorted(response['data'], key=lambda obj: obj['index'])
            embeddings = [Embedding.from_sequence(obj['embedding']) for obj in data]
        except (KeyError, TypeError) as e:
            raise OpenAIError(f"Unexpected embedding response shape: {e}") from e

        if len(embeddings) != len(chunks):
            raise OpenAIError(
                f"Embedding count mismatch: sent {len(chunks)} inputs, "
                f"received {len(embeddings)} embeddings"
            )

        return list(zip(chunks, embeddings))


class OpenAIChatCompletionClient(BaseChatClient):
    """Chat client for the OpenAI chat completions endpoint."""

    def __init__(self, model: OpenAIModel, config: OpenAIConfig,
                 additional_config: Optional[Dict[str, Any]] = None,
                 audit_logger: Optional[AuditLogger] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize chat client.

        Args:
            model: Chat model
            config: API key and endpoint settings
            additional_config: Extra request fields (temperature, top_p, ...)
                merged into the request body
            audit_logger: Optional audit logger
            session: Optional requests session
        """
        self.model = OpenAIModel(model)
        self.additional_config = dict(additional_config or {})
        self.audit_logger = audit_logger
        self.client = OpenAIHttpClient(config, audit_logger=audit_logger, session=session)
        self.url = self.client.url("chat/completions")

    def build_request(self, messages: Sequence[PromptMessage]) -> Dict[str, Any]:
        return {
            'model': self.model.value,
            'messages': [
                {'role': _ROLE_TO_OPENAI[message.role], 'content': message.content}
                for message in messages
            ],
            **self.additional_config,
        }

    def invoke(self, messages: Sequence[PromptMessage]) -> PromptMessage:
        start = time.time()
        response = self.client.send_request(self.build_request(messages), self.url)
        elapsed_ms = (time.time() - start) * 1000

        try:
            message = response['choices'][0]['message']
            reply = PromptMessage(_OPENAI_TO_ROLE[message['role']], message['content'])
        except (KeyError, IndexError, TypeError) as e:
            raise OpenAIError(f"Unexpected chat completion response shape: {e}") from e

        usage = response.get('usage') or {}
        if self.audit_logger and usage:
            self.audit_logger.log_model_inference(
                model_name=self.model.value,
                input_tokens=usage.get('prompt_tokens', 0),
                output_tokens=usage.get('completion_tokens', 0),
                inference_time_ms=elapsed_ms,
            )

        return reply

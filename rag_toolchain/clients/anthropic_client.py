"""Anthropic Messages API chat client."""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
import logging
import time

import requests

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.clients.base import BaseChatClient
from rag_toolchain.clients.errors import AnthropicError
from rag_toolchain.clients.http_client import JsonHttpClient
from rag_toolchain.clients.types import PromptMessage, Role
from rag_toolchain.config import AnthropicConfig

logger = logging.getLogger(__name__)

API_VERSION = "2023-06-01"


class AnthropicModel(str, Enum):
    CLAUDE_3_5_SONNET = "claude-3-5-sonnet-20240620"
    CLAUDE_3_OPUS = "claude-3-opus-20240229"
    CLAUDE_3_SONNET = "claude-3-sonnet-20240229"
    CLAUDE_3_HAIKU = "claude-3-haiku-20240307"


class AnthropicHttpClient(JsonHttpClient):
    """Transport for api.anthropic.com (x-api-key auth, pinned API version)."""

    error_class = AnthropicError

    def __init__(self, config: AnthropicConfig,
                 audit_logger: Optional[AuditLogger] = None,
                 session: Optional[requests.Session] = None):
        self.config = config
        super().__init__(timeout=config.timeout, audit_logger=audit_logger, session=session)

    def _auth_headers(self) -> Dict[str, str]:
        return {
            'x-api-key': self.config.api_key,
            'anthropic-version': API_VERSION,
        }

    def url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"


class AnthropicChatCompletionClient(BaseChatClient):
    """
    Chat client for Claude models.

    The Messages API takes the system prompt as a separate field, so
    system messages are pulled out of the conversation and joined.
    """

    def __init__(self, model: AnthropicModel, max_tokens: int, config: AnthropicConfig,
                 additional_config: Optional[Dict[str, Any]] = None,
                 audit_logger: Optional[AuditLogger] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize chat client.

        Args:
            model: Claude model
            max_tokens: Maximum tokens to generate
            config: API key and endpoint settings
            additional_config: Extra request fields merged into the body
            audit_logger: Optional audit logger
            session: Optional requests session
        """
        self.model = AnthropicModel(model)
        self.max_tokens = max_tokens
        self.additional_config = dict(additional_config or {})
        self.audit_logger = audit_logger
        self.client = AnthropicHttpClient(config, audit_logger=audit_logger, session=session)
        self.url = self.client.url("messages")

    def build_request(self, messages: Sequence[PromptMessage]) -> Dict[str, Any]:
        system_content = ""
        anthropic_messages: List[Dict[str, Any]] = []

        for message in messages:
            if message.role == Role.SYSTEM:
                system_content += message.content + "\n"
            else:
                anthropic_messages.append({
                    'role': 'assistant' if message.role == Role.AI else 'user',
                    'content': [{'type': 'text', 'text': message.content}],
                })

        request = {
            'messages': anthropic_messages,
            'model': self.model.value,
            'max_tokens': self.max_tokens,
        }
        if system_content:
            request['system'] = system_content
        request.update(self.additional_config)
        return request

    def invoke(self, messages: Sequence[PromptMessage]) -> PromptMessage:
        start = time.time()
        response = self.client.send_request(self.build_request(messages), self.url)
        elapsed_ms = (time.time() - start) * 1000

        try:
            text_blocks = [block['text'] for block in response['content']
                           if block.get('type') == 'text']
            reply = PromptMessage.ai(text_blocks[0])
        except (KeyError, IndexError, TypeError) as e:
            raise AnthropicError(f"Unexpected messages response shape: {e}") from e

        usage = response.get('usage') or {}
        if self.audit_logger and usage:
            self.audit_logger.log_model_inference(
                model_name=self.model.value,
                input_tokens=usage.get('input_tokens', 0),
                output_tokens=usage.get('output_tokens', 0),
                inference_time_ms=elapsed_ms,
                stop_reason=response.get('stop_reason'),
            )

        return reply

"""
Errors returned by provider HTTP APIs.

Both OpenAI and Anthropic answer failed requests with a JSON body of the
form ``{"error": {"type": ..., "message": ...}}``. The status code picks
the human-readable description.
"""

import json
from typing import Dict, Optional


class ProviderError(Exception):
    """Base error for provider API calls."""

    PROVIDER = "provider"
    STATUS_DESCRIPTIONS: Dict[int, str] = {}

    def __init__(self, message: str, status_code: Optional[int] = None,
                 error_type: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type

    @classmethod
    def from_response(cls, status_code: int, body_text: str) -> "ProviderError":
        """
        Map a non-success HTTP response to an error.

        Args:
            status_code: HTTP status code
            body_text: Raw response body

        Returns:
            Error instance describing the failure
        """
        try:
            body = json.loads(body_text)
            details = body['error']
            error_message = details['message']
            error_type = details.get('type')
        except (ValueError, KeyError, TypeError) as e:
            return cls(
                f"Status Code: {status_code} Error Deserializing Response Body: {e}",
                status_code=status_code,
            )

        description = cls.STATUS_DESCRIPTIONS.get(status_code)
        if description is None:
            return cls(
                f"Undefined Error: {status_code} - {body_text}",
                status_code=status_code,
                error_type=error_type,
            )

        return cls(f"{description}: {error_message}",
                   status_code=status_code, error_type=error_type)

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429


class OpenAIError(ProviderError):
    PROVIDER = "openai"
    STATUS_DESCRIPTIONS = {
        400: "Bad Request",
        401: "Invalid Authentication or Incorrect API Key provided",
        429: "Rate limit reached or Monthly quota exceeded",
        500: "Server Error",
        503: "The engine is currently overloaded",
    }


class AnthropicError(ProviderError):
    PROVIDER = "anthropic"
    STATUS_DESCRIPTIONS = {
        400: "Invalid Request Error",
        401: "Authentication Error",
        403: "Permission Error",
        404: "Not Found Error",
        413: "Request Too Large Error",
        429: "Rate Limit Error",
        500: "API Error",
        503: "Overloaded Error",
        529: "Overloaded Error",
    }

"""JSON-over-HTTP transport shared by the provider clients."""

from typing import Any, Dict, Optional, Type
import logging
import time

import requests

from rag_toolchain.audit.logger import AuditLogger
from rag_toolchain.clients.errors import ProviderError

logger = logging.getLogger(__name__)


class JsonHttpClient:
    """
    POSTs JSON bodies and decodes JSON responses.

    Subclasses supply auth headers and the provider's error class.
    Requests are not retried.
    """

    error_class: Type[ProviderError] = ProviderError

    def __init__(self, timeout: float = 60.0,
                 audit_logger: Optional[AuditLogger] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize client.

        Args:
            timeout: Request timeout in seconds
            audit_logger: Optional audit logger for egress events
            session: Optional pre-built session (connection pooling, tests)
        """
        self.timeout = timeout
        self.audit_logger = audit_logger
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})
        self.session.headers.update(self._auth_headers())

    def _auth_headers(self) -> Dict[str, str]:
        return {}

    def send_request(self, body: Dict[str, Any], url: str) -> Dict[str, Any]:
        """
        POST ``body`` to ``url``.

        Returns:
            Decoded JSON response

        Raises:
            ProviderError: On transport failure, non-2xx status or bad JSON
        """
        start = time.time()
        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise self.error_class(f"Error Sending Request: {e}") from e

        elapsed_ms = (time.time() - start) * 1000
        status_code = response.status_code
        logger.debug("POST %s -> %s in %.0fms", url, status_code, elapsed_ms)

        if self.audit_logger:
            self.audit_logger.log_network_egress(
                method='POST',
                url=url,
                status_code=status_code,
                response_size=len(response.content),
                execution_time_ms=elapsed_ms,
                provider=self.error_class.PROVIDER,
            )

        if not 200 <= status_code < 300:
            error = self.error_class.from_response(status_code, response.text)
            logger.warning("%s request failed: %s", self.error_class.PROVIDER, error)
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise self.error_class(
                f"Status Code: {status_code} Error Deserializing Response Body: {e}",
                status_code=status_code,
            ) from e

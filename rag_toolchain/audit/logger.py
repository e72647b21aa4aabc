"""
Audit logging for indexing and retrieval runs.

Each event is one JSON object per line in an append-only file.
Request and response bodies are never logged, only their sizes.
"""

import logging
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


class AuditLogger:
    """
    Structured audit logger.

    Events:
    - chunking (source, chunk parameters, chunk count)
    - network egress to embedding/chat providers (URL, status, byte count, time)
    - vector store writes and retrieval queries
    - model inference token usage
    - errors
    """

    def __init__(self, log_file: str = "./audit.log", level: str = "INFO"):
        """
        Initialize audit logger.

        Args:
            log_file: Path to audit log
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(f"rag_toolchain.audit.{self.log_file.resolve()}")
        self.logger.setLevel(getattr(logging, level))
        self.logger.propagate = False

        fh = logging.FileHandler(self.log_file, mode='a', encoding='utf-8')
        fh.setLevel(getattr(logging, level))
        fh.setFormatter(logging.Formatter('%(message)s'))

        # Remove existing handlers to avoid duplicates
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
        self.logger.addHandler(fh)

    def log_event(self, event_dict: Dict[str, Any]):
        """Log a structured event as JSON."""
        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        self.logger.info(json.dumps(event_dict, default=str))

    def log_chunking(self, source: str, chunk_size: int, chunk_overlap: int,
                     num_chunks: int, **kwargs):
        """
        Log a document being chunked.

        Args:
            source: Document identifier
            chunk_size: Configured chunk size
            chunk_overlap: Configured overlap
            num_chunks: Number of chunks produced
        """
        self.log_event({
            "event": "chunking",
            "source": source,
            "chunk_size": chunk_size,
            "chunk_overlap": chunk_overlap,
            "num_chunks": num_chunks,
            **kwargs
        })

    def log_network_egress(self, method: str, url: str, status_code: int,
                           response_size: int, execution_time_ms: float, **kwargs):
        """
        Log outbound request to a provider API.

        Response body is never logged.
        """
        self.log_event({
            "event": "network_egress",
            "method": method,
            "url": url,
            "status_code": status_code,
            "response_size_bytes": response_size,
            "execution_time_ms": execution_time_ms,
            **kwargs
        })

    def log_store_write(self, store: str, target: str, num_rows: int, **kwargs):
        self.log_event({
            "event": "store_write",
            "store": store,
            "target": target,
            "num_rows": num_rows,
            **kwargs
        })

    def log_query(self, query: str, num_results: int, execution_time_ms: float, **kwargs):
        """
        Log retrieval query execution.

        Args:
            query: Query text (truncated)
            num_results: Number of retrieved chunks
            execution_time_ms: Query execution time
        """
        self.log_event({
            "event": "retrieval_query",
            "query": query[:200],
            "num_results": num_results,
            "execution_time_ms": execution_time_ms,
            **kwargs
        })

    def log_model_inference(self, model_name: str, input_tokens: int,
                            output_tokens: int, inference_time_ms: float, **kwargs):
        self.log_event({
            "event": "model_inference",
            "model": model_name,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "inference_time_ms": inference_time_ms,
            **kwargs
        })

    def log_error(self, error_type: str, message: str, context: Optional[Dict] = None):
        """
        Log error.

        Args:
            error_type: Type of error
            message: Error message
            context: Optional context dictionary
        """
        self.log_event({
            "event": "error",
            "error_type": error_type,
            "message": message,
            **(context or {})
        })

    def close(self):
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()


def get_audit_logger(config: Optional[Dict[str, Any]] = None) -> Optional[AuditLogger]:
    """
    Get configured audit logger instance.

    Args:
        config: Audit config dict with 'enabled', 'file' and 'level' keys

    Returns:
        AuditLogger instance, or None when auditing is disabled
    """
    if config is None:
        config = {'enabled': True, 'file': './audit.log', 'level': 'INFO'}

    if not config.get('enabled', True):
        return None

    return AuditLogger(
        log_file=config.get('file', './audit.log'),
        level=config.get('level', 'INFO')
    )

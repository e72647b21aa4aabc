from rag_toolchain.audit.logger import AuditLogger, get_audit_logger

__all__ = ['AuditLogger', 'get_audit_logger']

"""Audit: append-only interaction and learning records."""

from duet.audit.log import AuditLog
from duet.audit.models import AuditEventKind, AuditRecord

__all__ = ["AuditEventKind", "AuditLog", "AuditRecord"]

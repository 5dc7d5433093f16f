from .page_record import PageRecord
from .audit_log import AuditLog

__all__ = ["PageRecord", "AuditLog"]

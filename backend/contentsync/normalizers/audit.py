# contentsync/normalizers/audit.py
from __future__ import annotations

from typing import Dict, Any
from contentsync.models.audit_log import AuditLog
from contentsync.utils.optimistic_lock import normalize_ts


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    """One history entry of a page: what happened, who did it, when."""
    if not log:
        raise ValueError("AuditLog cannot be None")

    return {
        "id": log.id,
        "slug": log.entity_id,
        "action": log.action,
        "actor_id": log.actor_id,
        "details": log.payload or {},
        "created_at": normalize_ts(log.created_at).isoformat(),
    }

# contentsync/application/content/list_pages.py
from typing import Optional
from contentsync.models.page_record import PageRecord
from contentsync.models.audit_log import AuditLog
from contentsync.utils.pagination import paginate_cursor


def list_pages(*, page: int = 1, per_page: int = 20):
    """Offset-paginated page listing, most recently edited first."""
    if page < 1 or per_page < 1:
        raise ValueError("page and per_page must be positive")

    return (
        PageRecord.query
        .order_by(PageRecord.updated_at.desc(), PageRecord.slug.asc())
        .paginate(page=page, per_page=per_page, error_out=False)
    )


def page_history(*, slug: str, cursor: Optional[str] = None, limit: int = 20):
    """Save/publish audit entries for `slug`, newest first."""
    query = AuditLog.query.filter(
        AuditLog.entity_type == "page",
        AuditLog.entity_id == slug,
    )
    return paginate_cursor(query, model=AuditLog, cursor=cursor, limit=limit)

# contentsync/normalizers/page_record.py
from contentsync.content.schema import is_registered
from contentsync.utils.optimistic_lock import normalize_ts


def _iso(ts):
    ts = normalize_ts(ts)
    return ts.isoformat() if ts else None


def normalize_page_record(record, admin=False):
    """
    Serialize a PageRecord for the REST surface.

    Public callers only ever see the published column; admin callers
    get both documents.
    """
    data = {
        "slug": record.slug,
        "published_document": record.published_content,
        "is_published": bool(record.published),
        "updated_at": _iso(record.updated_at),
        "published_at": _iso(record.published_at),
    }

    if admin:
        data["draft_document"] = record.draft_content

    return data


def normalize_page_summary(record):
    return {
        "slug": record.slug,
        "has_draft": record.draft_content is not None,
        "has_schema": is_registered(record.slug),
        "is_published": bool(record.published),
        "updated_at": _iso(record.updated_at),
        "published_at": _iso(record.published_at),
    }


def normalize_write_result(record):
    return {
        "slug": record.slug,
        "updated_at": _iso(record.updated_at),
        "is_published": bool(record.published),
        "published_at": _iso(record.published_at),
    }

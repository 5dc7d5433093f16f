# contentsync/normalizers/pagination.py
from typing import Callable, Any, Iterable, Dict

from flask_sqlalchemy.pagination import Pagination

from contentsync.utils.pagination import CursorMeta

Normalizer = Callable[[Any], Dict[str, Any]]


def normalize_cursor_page(items: Iterable[Any], normalize_fn: Normalizer, meta: CursorMeta) -> Dict[str, Any]:
    """Cursor-paginated response (page history)."""
    return {
        "items": [normalize_fn(item) for item in items],
        "pagination": {
            "has_more": meta["has_more"],
            "next_cursor": meta["next_cursor"],
        },
    }


def normalize_offset_page(pagination: Pagination, normalize_fn: Normalizer) -> Dict[str, Any]:
    """Offset-paginated response built from a Flask-SQLAlchemy ``Pagination``."""
    return {
        "items": [normalize_fn(item) for item in pagination.items],
        "pagination": {
            "page": pagination.page,
            "per_page": pagination.per_page,
            "total": pagination.total,
            "total_pages": pagination.pages,
        },
    }

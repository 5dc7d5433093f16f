from .fetch_content import fetch_published, fetch_for_authoring
from .save_draft import upsert_draft
from .publish_content import publish
from .list_pages import list_pages, page_history

__all__ = [
    "fetch_published",
    "fetch_for_authoring",
    "upsert_draft",
    "publish",
    "list_pages",
    "page_history",
]

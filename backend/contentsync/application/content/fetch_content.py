# contentsync/application/content/fetch_content.py
from contentsync.domain.exceptions import PageNotFound
from contentsync.models.page_record import PageRecord


def fetch_published(slug: str) -> PageRecord:
    """
    Public read: only records with a live published snapshot exist
    from the caller's point of view.
    """
    record = PageRecord.query.filter_by(slug=slug, published=True).first()

    if not record:
        raise PageNotFound(f"No published content for '{slug}'")

    return record


def fetch_for_authoring(slug: str) -> PageRecord:
    record = PageRecord.query.filter_by(slug=slug).first()

    if not record:
        raise PageNotFound(f"No content stored for '{slug}'")

    return record

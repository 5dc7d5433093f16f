# contentsync/application/content/_records.py
from sqlalchemy import select
from contentsync.extensions import db
from contentsync.models.page_record import PageRecord
from contentsync.domain.invariants.page_record import assert_page_record
from contentsync.utils.optimistic_lock import normalize_ts


def lock_record(slug: str):
    """Fetch the record for `slug` with a row-level lock (None if absent)."""
    return (
        db.session.execute(
            select(PageRecord)
            .where(PageRecord.slug == slug)
            .with_for_update()
        )
        .scalar_one_or_none()
    )


def assert_record(record: PageRecord) -> None:
    assert_page_record(
        is_published=record.published,
        published_document=record.published_content,
        updated_at=normalize_ts(record.updated_at),
        published_at=normalize_ts(record.published_at),
    )

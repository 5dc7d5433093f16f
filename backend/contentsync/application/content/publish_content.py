# contentsync/application/content/publish_content.py
from typing import Any, Dict, Optional
from sqlalchemy.exc import IntegrityError
from contentsync.extensions import db
from contentsync.models.page_record import PageRecord
from contentsync.domain.lifecycle.page_record import next_write_timestamp, utcnow
from contentsync.utils.audit import log_action
from contentsync.utils.optimistic_lock import normalize_ts
from contentsync.utils.transaction import transactional
from ._records import assert_record, lock_record


def publish(
    *,
    slug: str,
    document: Dict[str, Any],
    actor_id: Optional[str] = None,
) -> PageRecord:
    """
    Publish `document` for `slug`.

    The document is written to BOTH columns: the draft must never
    point at older content than what is live, or a later draft save
    would silently revert the site.
    """
    if not isinstance(document, dict):
        raise ValueError("document must be a JSON object")

    try:
        return _publish(slug, document, actor_id)
    except IntegrityError:
        return _publish(slug, document, actor_id)


def _publish(slug, document, actor_id):
    with transactional(f"publish {slug}"):
        record = lock_record(slug)

        if record is None:
            record = PageRecord()
            record.slug = slug
            db.session.add(record)

        stamp = next_write_timestamp(
            utcnow(),
            normalize_ts(record.updated_at),
            normalize_ts(record.published_at),
        )

        record.draft_content = document
        record.published_content = document
        record.published = True
        record.updated_at = stamp
        record.published_at = stamp
        db.session.flush()

        assert_record(record)

        log_action(
            action="page.publish",
            entity_type="page",
            entity_id=slug,
            actor_id=actor_id,
            payload={"published_at": stamp.isoformat()},
        )

    return record

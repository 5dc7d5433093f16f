# contentsync/application/content/save_draft.py
import logging
from datetime import datetime
from typing import Any, Dict, Optional
from sqlalchemy.exc import IntegrityError
from contentsync.extensions import db
from contentsync.models.page_record import PageRecord
from contentsync.domain.exceptions import ConflictError
from contentsync.domain.lifecycle.page_record import next_write_timestamp, utcnow
from contentsync.utils.audit import log_action
from contentsync.utils.optimistic_lock import is_stale, normalize_ts
from contentsync.utils.transaction import transactional
from ._records import assert_record, lock_record

logger = logging.getLogger(__name__)


def upsert_draft(
    *,
    slug: str,
    document: Dict[str, Any],
    actor_id: Optional[str] = None,
    expected_updated_at: Optional[datetime] = None,
) -> PageRecord:
    """
    Write the draft column of `slug`, creating the record on first save.

    Responsibilities:
    - upsert keyed on slug
    - strictly increasing updated_at
    - optional optimistic lock (last write wins otherwise)
    - audit logging
    """
    if not isinstance(document, dict):
        raise ValueError("document must be a JSON object")

    try:
        return _upsert(slug, document, actor_id, expected_updated_at)
    except IntegrityError:
        # Another writer created the row between our read and insert;
        # the row exists now, so the retry takes the update path.
        logger.info("Concurrent first save of %s, retrying as update", slug)
        return _upsert(slug, document, actor_id, expected_updated_at)


def _upsert(slug, document, actor_id, expected_updated_at):
    with transactional(f"draft save {slug}"):
        record = lock_record(slug)

        if record is None:
            record = PageRecord()
            record.slug = slug
            record.published = False
            db.session.add(record)
        elif is_stale(record.updated_at, expected_updated_at):
            raise ConflictError()

        record.draft_content = document
        record.updated_at = next_write_timestamp(
            utcnow(),
            normalize_ts(record.updated_at),
            normalize_ts(record.published_at),
        )
        db.session.flush()

        assert_record(record)

        log_action(
            action="page.save_draft",
            entity_type="page",
            entity_id=slug,
            actor_id=actor_id,
            payload={"sections": sorted(document.keys())},
        )

    return record

from contentsync.domain.exceptions import InvariantViolation


def assert_page_record(*, is_published, published_document, updated_at, published_at):
    """
    Guards the draft/published bookkeeping of a page record.
    Called after every write, by every store implementation.
    """
    has_snapshot = bool(is_published) and published_document is not None

    if (published_at is not None) != has_snapshot:
        raise InvariantViolation(
            "published_at must be set exactly when a published snapshot is live "
            f"(is_published={is_published}, published_at={published_at})"
        )

    if updated_at is not None and published_at is not None and updated_at < published_at:
        raise InvariantViolation(
            f"updated_at ({updated_at}) is older than published_at ({published_at})"
        )

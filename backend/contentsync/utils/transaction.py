import logging
from contextlib import contextmanager
from contentsync.extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def transactional(label: str = "transaction"):
    """
    Commit the session when the block exits cleanly, roll back otherwise.

    `label` only shows up in the log line written on rollback.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        logger.debug("Rolled back %s: %s", label, exc.__class__.__name__)
        raise

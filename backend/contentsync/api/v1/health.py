import logging
from flask import jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from contentsync.extensions import db
from . import v1_bp

logger = logging.getLogger(__name__)


@v1_bp.route("/health", methods=["GET"])
def health_check():
    """Liveness plus a round trip to the page store."""
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        database = "unavailable"

    status = 200 if database == "ok" else 503
    return jsonify({
        "status": "ok" if status == 200 else "degraded",
        "service": "contentsync",
        "database": database,
    }), status

import logging
from functools import wraps
from flask import current_app, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity

logger = logging.getLogger(__name__)


def roles_required(*allowed_roles):
    """
    Reject the request with 403 unless the JWT's role claim is allowed.

    Must sit below ``@jwt_required()``. The claim name comes from
    ``JWT_ROLE_CLAIM`` (default ``"role"``).
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claim = current_app.config.get("JWT_ROLE_CLAIM", "role")
            role = get_jwt().get(claim)

            if role not in allowed_roles:
                logger.info("Denied %s to %s (role=%r)", fn.__name__, get_jwt_identity(), role)
                return jsonify({
                    "error": "Forbidden",
                    "message": "Insufficient permissions",
                }), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator

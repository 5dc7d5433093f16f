from flask import Blueprint

# /api/v1: page content, history and health
v1_bp = Blueprint("content_v1", __name__)

from . import health  # noqa: E402,F401
from . import content  # noqa: E402,F401

# contentsync/api/v1/content.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from contentsync.application.content import (
    fetch_published,
    fetch_for_authoring,
    upsert_draft,
    publish,
    list_pages,
    page_history,
)
from contentsync.content.schema import defaults_for
from contentsync.normalizers.page_record import (
    normalize_page_record,
    normalize_page_summary,
    normalize_write_result,
)
from contentsync.normalizers.audit import normalize_audit_log
from contentsync.normalizers.pagination import normalize_cursor_page, normalize_offset_page
from contentsync.utils.decorators import roles_required
from contentsync.utils.optimistic_lock import if_unmodified_since
from . import v1_bp


def _document_from_body():
    data = request.get_json(silent=True) or {}
    document = data.get("document")

    if not isinstance(document, dict):
        return None
    return document


# ------------------------
# Public
# ------------------------

@v1_bp.route("/content/<slug>", methods=["GET"])
def get_published_content(slug):
    record = fetch_published(slug)
    return jsonify(normalize_page_record(record, admin=False))


@v1_bp.route("/content/<slug>/defaults", methods=["GET"])
def get_content_defaults(slug):
    return jsonify({"slug": slug, "document": defaults_for(slug)})


# ------------------------
# Authoring
# ------------------------

@v1_bp.route("/content", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_content_pages():
    page_num = request.args.get("page", 1, type=int)
    per_page = min(request.args.get("per_page", 20, type=int), 100)

    pagination = list_pages(page=page_num, per_page=per_page)

    return jsonify(normalize_offset_page(pagination, normalize_page_summary))


@v1_bp.route("/content/<slug>/draft", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_draft_content(slug):
    record = fetch_for_authoring(slug)
    return jsonify(normalize_page_record(record, admin=True))


@v1_bp.route("/content/<slug>/draft", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def save_draft_content(slug):
    document = _document_from_body()
    if document is None:
        return jsonify({"error": "ValidationError", "message": "'document' must be a JSON object"}), 400

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    expected = if_unmodified_since()

    record = upsert_draft(
        slug=slug,
        document=document,
        actor_id=get_jwt_identity(),
        expected_updated_at=expected,
    )

    return jsonify(normalize_write_result(record)), 200


@v1_bp.route("/content/<slug>/publish", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def publish_content(slug):
    document = _document_from_body()
    if document is None:
        return jsonify({"error": "ValidationError", "message": "'document' must be a JSON object"}), 400

    record = publish(
        slug=slug,
        document=document,
        actor_id=get_jwt_identity(),
    )

    return jsonify(normalize_write_result(record)), 200


@v1_bp.route("/content/<slug>/history", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_content_history(slug):
    limit = request.args.get("limit", 20, type=int)
    cursor = request.args.get("cursor")

    items, meta = page_history(slug=slug, cursor=cursor, limit=limit)

    return jsonify(normalize_cursor_page(items, normalize_audit_log, meta))

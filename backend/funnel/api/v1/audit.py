from flask import request, jsonify
from flask_jwt_extended import jwt_required

from funnel.models.audit_log import AuditLog
from funnel.normalizers.audit import normalize_audit_log
from funnel.normalizers.pagination import normalize_pagination
from funnel.utils.decorators import profile_member_required, session_required
from funnel.utils.pagination import apply_cursor, paginate_cursor
from . import v1_bp


@v1_bp.route("/profiles/<profile_id>/audit", methods=["GET"])
@jwt_required()
@session_required
@profile_member_required
def list_audit_logs(profile_id, session, profile):
    limit = min(request.args.get("limit", 20, type=int), 100)

    query = AuditLog.query.filter(AuditLog.profile_id == profile.id)

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    query = apply_cursor(query, model=AuditLog, cursor=request.args.get("cursor"))
    logs, cursor = paginate_cursor(query, model=AuditLog, limit=limit)

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=cursor)), 200

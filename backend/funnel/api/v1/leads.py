from urllib.parse import quote

from flask import Response, current_app, jsonify, redirect, request
from flask_jwt_extended import jwt_required

from funnel.application.forms.form_builder import public_schema
from funnel.application.leads.export_leads import export_leads_csv
from funnel.application.leads.list_leads import list_leads
from funnel.application.leads.submit_lead import submit_lead
from funnel.application.leads.update_status import update_lead_status
from funnel.domain.exceptions import PersistenceError
from funnel.normalizers.lead import normalize_lead
from funnel.normalizers.pagination import normalize_pagination
from funnel.utils.decorators import profile_member_required, session_required
from . import v1_bp


@v1_bp.route("/leads", methods=["POST"])
def submit_lead_view():
    """Public form target. Always answers 303 to the thank-you page."""
    profile_slug = request.form.get("profile_slug", "")

    try:
        submit_lead(profile_slug=profile_slug, pairs=request.form.items(multi=True))
    except PersistenceError as exc:
        current_app.logger.error("Lead submission for '%s' failed: %s", profile_slug, exc)

    base = current_app.config.get("PUBLIC_BASE_URL") or ""
    return redirect(f"{base}/thank-you?slug={quote(profile_slug)}", code=303)


@v1_bp.route("/profiles/<profile_id>/leads", methods=["GET"])
@jwt_required()
@session_required
@profile_member_required
def list_leads_view(profile_id, session, profile):
    page_size = current_app.config["LEADS_PAGE_SIZE"]
    try:
        limit = min(int(request.args.get("limit", page_size)), page_size)
    except ValueError:
        return jsonify({"error": "ValidationError", "message": "limit must be an integer"}), 400

    leads, cursor = list_leads(
        session=session,
        profile_id=profile_id,
        limit=limit,
        cursor=request.args.get("cursor"),
        status=request.args.get("status"),
    )

    descriptors = public_schema(profile_id)
    return jsonify(normalize_pagination(
        leads,
        lambda lead: normalize_lead(lead, descriptors=descriptors, display_name=profile.display_name),
        cursor=cursor,
    )), 200


@v1_bp.route("/profiles/<profile_id>/leads/<lead_id>/status", methods=["POST"])
@jwt_required()
@session_required
@profile_member_required
def update_lead_status_view(profile_id, lead_id, session, profile):
    data = request.get_json(silent=True) or {}

    lead, changed = update_lead_status(
        session=session,
        profile_id=profile_id,
        lead_id=lead_id,
        status=str(data.get("status") or ""),
    )

    return jsonify({
        "lead": normalize_lead(lead, descriptors=public_schema(profile_id), display_name=profile.display_name),
        "changed": changed,
        "message": f"Marked as {lead.status}" if changed else None,
        "flash_ttl_ms": current_app.config["FLASH_MESSAGE_TTL_MS"],
    }), 200


@v1_bp.route("/profiles/<profile_id>/leads/export.csv", methods=["GET"])
@jwt_required()
@session_required
def export_leads_view(profile_id, session):
    filename, body = export_leads_csv(session=session, profile_id=profile_id)

    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

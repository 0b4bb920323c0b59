from flask import request, jsonify
from flask_jwt_extended import jwt_required

from funnel.application.profiles.platform_settings import get_settings, update_settings
from funnel.application.profiles.review_profile import (
    approve_profile,
    list_all_profiles,
    reject_profile,
)
from funnel.normalizers.profile import normalize_profile, normalize_settings
from funnel.utils.decorators import platform_admin_required, session_required
from . import v1_bp


@v1_bp.route("/platform/profiles", methods=["GET"])
@jwt_required()
@session_required
@platform_admin_required
def list_platform_profiles(session):
    profiles = list_all_profiles(session=session, status=request.args.get("status"))

    return jsonify({"items": [normalize_profile(p, admin=True) for p in profiles]}), 200


@v1_bp.route("/profiles/<profile_id>/approve", methods=["POST"])
@jwt_required()
@session_required
def approve_profile_view(profile_id, session):
    profile = approve_profile(session=session, profile_id=profile_id)
    return jsonify({"profile": normalize_profile(profile, admin=True), "message": "Profile approved"}), 200


@v1_bp.route("/profiles/<profile_id>/reject", methods=["POST"])
@jwt_required()
@session_required
def reject_profile_view(profile_id, session):
    data = request.get_json(silent=True) or {}
    profile = reject_profile(session=session, profile_id=profile_id, reason=data.get("reason"))
    return jsonify({"profile": normalize_profile(profile, admin=True), "message": "Profile rejected"}), 200


@v1_bp.route("/platform/settings", methods=["GET"])
@jwt_required()
@session_required
def get_platform_settings(session):
    return jsonify(normalize_settings(get_settings(session=session))), 200


@v1_bp.route("/platform/settings", methods=["PUT"])
@jwt_required()
@session_required
def update_platform_settings(session):
    data = request.get_json(silent=True) or {}
    settings = update_settings(session=session, data=data)
    return jsonify({**normalize_settings(settings), "message": "Settings saved"}), 200

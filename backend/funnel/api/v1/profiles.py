from flask import current_app, request, jsonify
from flask_jwt_extended import jwt_required

from funnel.application.profiles.access import list_profiles_for
from funnel.application.profiles.create_profile import create_profile
from funnel.application.profiles.update_profile import update_profile
from funnel.normalizers.profile import normalize_profile
from funnel.utils.decorators import profile_member_required, session_required
from funnel.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


@v1_bp.route("/profiles", methods=["POST"])
@jwt_required()
@session_required
def create_profile_view(session):
    data = request.get_json(silent=True) or {}

    profile = create_profile(session=session, data=data)

    return jsonify({
        "profile": normalize_profile(profile),
        "message": "Profile created" if profile.is_active else "Profile submitted for approval",
    }), 201


@v1_bp.route("/profiles", methods=["GET"])
@jwt_required()
@session_required
def list_my_profiles(session):
    return jsonify({
        "items": [normalize_profile(p) for p in list_profiles_for(session)]
    }), 200


@v1_bp.route("/profiles/<profile_id>", methods=["GET"])
@jwt_required()
@session_required
@profile_member_required
def get_profile_view(profile_id, session, profile):
    return jsonify(normalize_profile(profile, admin=session.is_platform_admin)), 200


@v1_bp.route("/profiles/<profile_id>", methods=["PUT"])
@jwt_required()
@session_required
@profile_member_required
def update_profile_view(profile_id, session, profile):
    enforce_optimistic_lock(profile)

    data = request.get_json(silent=True) or {}
    profile, changed_fields = update_profile(session=session, profile_id=profile_id, data=data)

    return jsonify({
        "profile": normalize_profile(profile),
        "changed": changed_fields,
        "message": "Saved" if changed_fields else "No changes detected",
        "flash_ttl_ms": current_app.config["FLASH_MESSAGE_TTL_MS"],
    }), 200

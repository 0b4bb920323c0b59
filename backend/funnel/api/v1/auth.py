from flask import current_app, request, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt_identity,
    jwt_required,
)
from funnel.extensions import db
from funnel.models.user import User
from funnel.utils.transaction import transactional
from . import v1_bp

MIN_PASSWORD_LENGTH = 8


def issue_tokens(user: User) -> dict:
    claims = {"is_platform_admin": bool(user.is_platform_admin)}
    return {
        "access_token": create_access_token(identity=user.id, additional_claims=claims),
        "refresh_token": create_refresh_token(identity=user.id, additional_claims=claims),
    }


def _credentials():
    data = request.get_json(silent=True)
    if not data:
        return None, None
    email = str(data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    return email, password


@v1_bp.route("/auth/register", methods=["POST"])
def register():
    email, password = _credentials()

    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    if "@" not in email:
        return jsonify({"error": "Invalid email address"}), 400

    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({"error": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"error": "Email already registered"}), 409

    user = User()
    user.email = email
    user.set_password(password)

    with transactional():
        db.session.add(user)

    current_app.logger.info("Registered user %s", user.id)

    return jsonify({"id": user.id, "email": user.email, **issue_tokens(user)}), 201


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    email, password = _credentials()

    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(password):
        return jsonify({"error": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    return jsonify(issue_tokens(user)), 200


@v1_bp.route("/auth/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    user = db.session.get(User, get_jwt_identity())
    if user is None or not user.is_active:
        return jsonify({"error": "User account missing or disabled"}), 401

    return jsonify({
        "access_token": create_access_token(
            identity=user.id,
            additional_claims={"is_platform_admin": bool(user.is_platform_admin)},
        )
    }), 200


@v1_bp.route("/auth/me", methods=["GET"])
@jwt_required()
def me():
    user = db.session.get(User, get_jwt_identity())
    if user is None:
        return jsonify({"error": "User not found"}), 404

    return jsonify({
        "id": user.id,
        "email": user.email,
        "is_platform_admin": bool(user.is_platform_admin),
    }), 200

from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt_identity

from funnel.extensions import db
from funnel.models.user import User
from funnel.application.session import SessionContext
from funnel.application.profiles.access import authorize_profile, require_platform_admin


def session_required(fn):
    """
    Place below ``jwt_required()``. Injects ``session`` (a SessionContext).
    The admin flag is read from the user row so that grants and revocations
    apply without waiting for the token to expire.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = db.session.get(User, get_jwt_identity())
        if user is None or not user.is_active:
            return jsonify({"error": "Unauthorized", "message": "User account missing or disabled"}), 401

        kwargs["session"] = SessionContext(
            user_id=user.id,
            is_platform_admin=bool(user.is_platform_admin),
        )
        return fn(*args, **kwargs)
    return wrapper


def profile_member_required(fn):
    """Place below ``session_required``. Injects the authorized ``profile``."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        kwargs["profile"] = authorize_profile(kwargs["session"], kwargs["profile_id"])
        return fn(*args, **kwargs)
    return wrapper


def platform_admin_required(fn):
    """Place below ``session_required``."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        require_platform_admin(kwargs["session"])
        return fn(*args, **kwargs)
    return wrapper

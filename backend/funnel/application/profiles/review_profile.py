from typing import Optional

from flask import current_app

from funnel.models.base import utcnow
from funnel.models.profile import Profile
from funnel.domain.lifecycle.profile import assert_profile_transition
from funnel.utils.audit import log_action
from funnel.utils.transaction import transactional
from .access import get_profile, require_platform_admin


def approve_profile(*, session, profile_id: str) -> Profile:
    require_platform_admin(session)
    profile = get_profile(profile_id)

    assert_profile_transition(from_status=profile.status, to_status="active")

    with transactional():
        profile.status = "active"
        profile.approved_at = utcnow()
        profile.approved_by = session.user_id
        profile.rejection_reason = None

        log_action(
            session=session,
            action="profile.approve",
            entity_type="profile",
            entity_id=profile.id,
            profile_id=profile.id,
        )

    current_app.logger.info("Profile %s approved by %s", profile.slug, session.user_id)
    return profile


def reject_profile(*, session, profile_id: str, reason: Optional[str] = None) -> Profile:
    require_platform_admin(session)
    profile = get_profile(profile_id)

    assert_profile_transition(from_status=profile.status, to_status="rejected")

    with transactional():
        profile.status = "rejected"
        profile.rejection_reason = (reason or "").strip() or None

        log_action(
            session=session,
            action="profile.reject",
            entity_type="profile",
            entity_id=profile.id,
            profile_id=profile.id,
            payload={"reason": profile.rejection_reason},
        )

    current_app.logger.info("Profile %s rejected by %s", profile.slug, session.user_id)
    return profile


def list_all_profiles(*, session, status: Optional[str] = None):
    require_platform_admin(session)
    query = Profile.query
    if status:
        query = query.filter_by(status=status)
    return query.order_by(Profile.created_at.desc()).all()

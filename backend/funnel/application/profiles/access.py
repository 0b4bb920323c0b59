from typing import List
from funnel.extensions import db
from funnel.models.profile import Profile
from funnel.models.profile_member import ProfileMember
from funnel.domain.exceptions import Forbidden, NotFound


def get_profile(profile_id: str) -> Profile:
    profile = db.session.get(Profile, profile_id)
    if profile is None:
        raise NotFound("Profile not found")
    return profile


def can_manage(session, profile: Profile) -> bool:
    if session.is_platform_admin:
        return True
    return profile.owner_user_id == session.user_id or profile.has_member(session.user_id)


def authorize_profile(session, profile_id: str) -> Profile:
    """Loads a profile the acting user may manage, or raises."""
    profile = get_profile(profile_id)

    if not can_manage(session, profile):
        raise Forbidden("You do not have access to this profile")

    return profile


def require_platform_admin(session) -> None:
    if not session.is_platform_admin:
        raise Forbidden("Platform admin role required")


def list_profiles_for(session) -> List[Profile]:
    query = Profile.query
    if not session.is_platform_admin:
        member_of = db.select(ProfileMember.profile_id).where(
            ProfileMember.user_id == session.user_id
        )
        query = query.filter(
            (Profile.owner_user_id == session.user_id) | Profile.id.in_(member_of)
        )

    return query.order_by(Profile.created_at.desc()).all()

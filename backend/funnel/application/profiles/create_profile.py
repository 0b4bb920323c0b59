from typing import Any, Dict

from flask import current_app
from sqlalchemy.exc import IntegrityError

from funnel.extensions import db
from funnel.models.form_field import FormField
from funnel.models.platform_settings import PlatformSettings
from funnel.models.profile import Profile
from funnel.models.profile_member import ProfileMember
from funnel.domain.exceptions import Conflict, Forbidden
from funnel.domain.forms.schema import SEED_FIELDS
from funnel.domain.invariants.ordering import ORDER_STEP
from funnel.utils.audit import log_action
from funnel.utils.transaction import transactional
from .fields import clean_display_name, clean_optional_text, clean_slug, parse_email_list


def create_profile(
    *,
    session,
    data: Dict[str, Any],
) -> Profile:
    """
    Create a tenant profile owned by the acting user.

    Edge cases handled:
    - Admin-only creation mode
    - Duplicate slug
    - Approval requirement (profile starts pending)
    """
    display_name = clean_display_name(data.get("display_name"))
    slug = clean_slug(data.get("slug"))

    settings = PlatformSettings.current()
    if settings.profile_creation_mode == "admin_only" and not session.is_platform_admin:
        raise Forbidden("Profile creation is currently admin-only.")

    if Profile.query.filter_by(slug=slug).first():
        raise Conflict("Slug already exists")

    profile = Profile()
    profile.slug = slug
    profile.display_name = display_name
    profile.owner_user_id = session.user_id
    profile.whatsapp_number = clean_optional_text(data.get("whatsapp_number"))
    profile.notification_emails = parse_email_list(data.get("notification_emails"))
    profile.packages = []
    profile.status = "pending" if settings.require_approval else "active"

    try:
        with transactional():
            db.session.add(profile)
            db.session.flush()  # ensures profile.id exists

            member = ProfileMember()
            member.profile_id = profile.id
            member.user_id = session.user_id
            member.role = "owner"
            db.session.add(member)

            seed_form_fields(profile.id)

            log_action(
                session=session,
                action="profile.create",
                entity_type="profile",
                entity_id=profile.id,
                profile_id=profile.id,
                payload={"slug": profile.slug, "status": profile.status},
            )
    except IntegrityError as exc:
        raise Conflict("Slug already exists") from exc

    current_app.logger.info("Profile %s created with status %s", profile.slug, profile.status)
    return profile


def seed_form_fields(profile_id: str) -> None:
    for position, spec in enumerate(SEED_FIELDS, start=1):
        field = FormField()
        field.profile_id = profile_id
        field.order_index = ORDER_STEP * position
        for column, value in spec.as_columns().items():
            setattr(field, column, value)
        db.session.add(field)

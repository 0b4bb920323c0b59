from typing import Any, Dict

from funnel.models.profile import Profile
from funnel.utils.audit import log_action
from funnel.utils.transaction import transactional
from .access import authorize_profile
from .fields import (
    clean_accent_color,
    clean_display_name,
    clean_optional_text,
    clean_packages,
    clean_theme,
    parse_email_list,
)

# Field -> cleaner. Slug and status are not editable here.
ALLOWED_UPDATE_FIELDS = {
    "display_name": clean_display_name,
    "theme": clean_theme,
    "accent_color": clean_accent_color,
    "hero_headline": clean_optional_text,
    "hero_subtext": clean_optional_text,
    "whatsapp_number": clean_optional_text,
    "notification_emails": parse_email_list,
    "packages": clean_packages,
}


def update_profile(
    *,
    session,
    profile_id: str,
    data: Dict[str, Any],
) -> tuple[Profile, list[str]]:
    """
    Update the public-page settings of a profile.

    Returns the profile and the names of the fields that actually changed.
    """
    profile = authorize_profile(session, profile_id)

    cleaned = {
        field: clean(data[field])
        for field, clean in ALLOWED_UPDATE_FIELDS.items()
        if field in data
    }

    changed_fields = [
        field for field, value in cleaned.items()
        if getattr(profile, field) != value
    ]

    if not changed_fields:
        return profile, []

    with transactional():
        for field in changed_fields:
            setattr(profile, field, cleaned[field])

        log_action(
            session=session,
            action="profile.update",
            entity_type="profile",
            entity_id=profile.id,
            profile_id=profile.id,
            payload={"fields": changed_fields},
        )

    return profile, changed_fields

from typing import Any, Dict


def _iso(value):
    return value.isoformat() if value else None


def normalize_profile(profile, admin: bool = False) -> Dict[str, Any]:
    data = {
        "id": profile.id,
        "slug": profile.slug,
        "display_name": profile.display_name,
        "status": profile.status,
        "theme": profile.theme,
        "accent_color": profile.accent_color,
        "hero_headline": profile.hero_headline,
        "hero_subtext": profile.hero_subtext,
        "packages": profile.packages or [],
        "whatsapp_number": profile.whatsapp_number,
        "notification_emails": profile.notification_emails or [],
        "updated_at": _iso(profile.updated_at),
    }

    if admin:
        data.update({
            "owner_user_id": profile.owner_user_id,
            "created_at": _iso(profile.created_at),
            "approved_at": _iso(profile.approved_at),
            "approved_by": profile.approved_by,
            "rejection_reason": profile.rejection_reason,
        })

    return data


def normalize_public_profile(profile) -> Dict[str, Any]:
    """What a visitor sees; no relay addresses, no approval trail."""
    return {
        "slug": profile.slug,
        "display_name": profile.display_name,
        "theme": profile.theme,
        "accent_color": profile.accent_color,
        "hero_headline": profile.hero_headline,
        "hero_subtext": profile.hero_subtext,
        "packages": profile.packages or [],
        "has_whatsapp": bool(profile.whatsapp_number),
    }


def normalize_settings(settings) -> Dict[str, Any]:
    return {
        "profile_creation_mode": settings.profile_creation_mode,
        "require_approval": bool(settings.require_approval),
    }

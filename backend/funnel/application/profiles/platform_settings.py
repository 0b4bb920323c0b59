from typing import Any, Dict

from funnel.extensions import db
from funnel.models.platform_settings import PROFILE_CREATION_MODES, PlatformSettings
from funnel.domain.exceptions import ValidationError
from funnel.domain.forms.schema import as_bool
from funnel.utils.audit import log_action
from funnel.utils.transaction import transactional
from .access import require_platform_admin


def get_settings(*, session) -> PlatformSettings:
    require_platform_admin(session)
    return PlatformSettings.current()


def update_settings(*, session, data: Dict[str, Any]) -> PlatformSettings:
    require_platform_admin(session)
    settings = PlatformSettings.current()

    if "profile_creation_mode" in data:
        mode = data["profile_creation_mode"]
        if mode not in PROFILE_CREATION_MODES:
            raise ValidationError(
                f"profile_creation_mode must be one of {', '.join(PROFILE_CREATION_MODES)}"
            )
        settings.profile_creation_mode = mode

    if "require_approval" in data:
        settings.require_approval = as_bool(data["require_approval"])

    with transactional():
        db.session.add(settings)
        log_action(
            session=session,
            action="platform.settings.update",
            entity_type="platform_settings",
            entity_id=str(settings.id),
            payload={
                "profile_creation_mode": settings.profile_creation_mode,
                "require_approval": settings.require_approval,
            },
        )

    return settings

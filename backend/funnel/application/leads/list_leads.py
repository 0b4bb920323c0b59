from typing import Optional

from funnel.models.lead import LEAD_STATUSES, Lead
from funnel.domain.exceptions import ValidationError
from funnel.utils.pagination import CursorMeta, apply_cursor, paginate_cursor
from funnel.application.profiles.access import authorize_profile


def list_leads(
    *,
    session,
    profile_id: str,
    limit: int,
    cursor: Optional[str] = None,
    status: Optional[str] = None,
) -> tuple[list[Lead], CursorMeta]:
    """Lead inbox, newest first."""
    authorize_profile(session, profile_id)

    query = Lead.query.filter(Lead.profile_id == profile_id)

    if status:
        if status not in LEAD_STATUSES:
            raise ValidationError(f"Status must be one of {', '.join(LEAD_STATUSES)}")
        query = query.filter(Lead.status == status)

    query = apply_cursor(query, model=Lead, cursor=cursor)
    return paginate_cursor(query, model=Lead, limit=limit)

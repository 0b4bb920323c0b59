from funnel.models.base import utcnow
from funnel.models.lead import LEAD_STATUSES, Lead
from funnel.domain.exceptions import NotFound, ValidationError
from funnel.domain.lifecycle.lead import apply_lead_status
from funnel.utils.audit import log_action
from funnel.utils.transaction import transactional
from funnel.application.profiles.access import authorize_profile


def update_lead_status(*, session, profile_id: str, lead_id: str, status: str) -> tuple[Lead, bool]:
    if status not in LEAD_STATUSES:
        raise ValidationError(f"Status must be one of {', '.join(LEAD_STATUSES)}")

    authorize_profile(session, profile_id)

    lead = Lead.query.filter_by(id=lead_id, profile_id=profile_id).first()
    if lead is None:
        raise NotFound("Lead not found")

    from_status = lead.status

    with transactional():
        changed = apply_lead_status(lead, status, now=utcnow())
        if changed:
            log_action(
                session=session,
                action="lead.status",
                entity_type="lead",
                entity_id=lead.id,
                profile_id=profile_id,
                payload={"from": from_status, "to": status},
            )

    return lead, changed

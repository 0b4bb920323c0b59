from typing import Any, Iterable, Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from funnel.extensions import db
from funnel.models.lead import Lead
from funnel.models.profile import Profile
from funnel.domain.exceptions import PersistenceError
from funnel.domain.forms.payload import LeadPayload
from funnel.domain.forms.schema import label_payload
from funnel.services.email_relay import relay_lead
from funnel.utils.transaction import transactional
from funnel.application.forms.form_builder import public_schema


def submit_lead(*, profile_slug: str, pairs: Iterable[Tuple[str, Any]]) -> Optional[Lead]:
    """
    Stores a public form submission.

    Returns None, without storing anything, when the slug is unknown or
    the profile is not active. The email relay never fails a submission.
    """
    payload = LeadPayload.from_pairs(pairs)

    profile = Profile.query.filter_by(slug=profile_slug).first()
    if profile is None or not profile.is_active:
        current_app.logger.info("Lead for unknown or inactive profile '%s' dropped", profile_slug)
        return None

    lead = Lead()
    lead.profile_id = profile.id
    lead.form_data = payload.to_dict()
    lead.phone = payload.phone
    lead.email = payload.email
    lead.status = "new"

    try:
        with transactional():
            db.session.add(lead)
    except SQLAlchemyError as exc:
        raise PersistenceError("Failed to store lead") from exc

    current_app.logger.info("Lead %s stored for %s", lead.id, profile.slug)

    relay_lead(profile, lead, label_payload(public_schema(profile.id), payload))
    return lead

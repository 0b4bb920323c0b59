from typing import Optional
from funnel.extensions import db
from funnel.models.audit_log import AuditLog

def log_action(
    *,
    session,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    profile_id: Optional[str] = None,
    payload: dict | None = None
):
    """Stage an audit row in the current DB session; the caller commits."""
    log = AuditLog()

    log.actor_id = session.user_id if session is not None else None
    log.profile_id = profile_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)

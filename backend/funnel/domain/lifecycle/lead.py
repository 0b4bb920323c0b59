from typing import Set
from funnel.domain.exceptions import InvalidTransition

ALLOWED_LEAD_TRANSITIONS: dict[str, Set[str]] = {
    "new": {"contacted", "booked"},
    "contacted": {"booked", "new"},
    "booked": {"new"},
}

def assert_lead_transition(*, from_status: str, to_status: str) -> None:
    allowed = ALLOWED_LEAD_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvalidTransition(
            f"Illegal lead transition: {from_status} → {to_status}"
        )


def apply_lead_status(lead, to_status: str, *, now) -> bool:
    """
    Moves a lead to `to_status`, stamping contacted_at / booked_at the
    first time those states are reached. Returns False when the lead is
    already in that status.
    """
    if lead.status == to_status:
        return False

    assert_lead_transition(from_status=lead.status, to_status=to_status)

    if to_status in ("contacted", "booked") and lead.contacted_at is None:
        lead.contacted_at = now
    if to_status == "booked" and lead.booked_at is None:
        lead.booked_at = now

    lead.status = to_status
    return True

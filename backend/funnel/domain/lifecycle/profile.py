from typing import Set
from funnel.domain.exceptions import InvalidTransition

# Explicit allowed state transitions
ALLOWED_PROFILE_TRANSITIONS: dict[str, Set[str]] = {
    "pending": {"active", "rejected"},
    "rejected": {"active"},
    "active": {"rejected"},  # take-down by platform admin
}

def assert_profile_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards tenant profile approval transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_PROFILE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvalidTransition(
            f"Illegal profile transition: {from_status} → {to_status}"
        )

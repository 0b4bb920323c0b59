from typing import Any, Mapping

from funnel.domain.ordering.collection import MOVE_DOWN, MOVE_UP


def read_direction(data: Mapping[str, Any]) -> int:
    """
    Reads ``direction`` from a move request body. Anything other than -1 or
    1 comes back as 0, which the collection treats as a no-op.
    """
    try:
        direction = int(data.get("direction", 0))
    except (TypeError, ValueError):
        return 0

    return direction if direction in (MOVE_UP, MOVE_DOWN) else 0

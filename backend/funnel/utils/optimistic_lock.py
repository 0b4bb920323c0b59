from datetime import timezone

from dateutil.parser import parse, ParserError
from flask import request

from funnel.domain.exceptions import Conflict, ValidationError


def normalize_ts(ts):
    """
    Timezone-aware, second precision. HTTP dates carry whole seconds, so
    the stored microseconds would otherwise always look newer.
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.replace(microsecond=0)


def enforce_optimistic_lock(entity):
    """
    Honours ``If-Unmodified-Since``: raises Conflict when the entity was
    modified after the client's copy. Without the header nothing is checked.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ParserError, OverflowError) as exc:
        raise ValidationError("Invalid If-Unmodified-Since header") from exc

    if entity.updated_at is None:
        return

    if normalize_ts(entity.updated_at) > client_ts:
        raise Conflict("Conflict detected. Resource has been modified.")

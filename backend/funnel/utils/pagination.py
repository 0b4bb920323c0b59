from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Tuple, Type, TypedDict

from sqlalchemy.orm import Query
from sqlalchemy.sql import and_, or_
from werkzeug.exceptions import BadRequest


class CursorMeta(TypedDict):
    has_more: bool
    next_cursor: Optional[str]


def encode_cursor(created_at: datetime, row_id: str) -> str:
    """
    Cursor format: ``<ISO8601 created_at>|<id>``.

    Readable on purpose so that support tooling can eyeball where a page
    boundary sits.
    """
    if not isinstance(created_at, datetime) or not row_id:
        raise ValueError("created_at and row_id are required to encode a cursor")

    return f"{created_at.isoformat()}|{row_id}"


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    if not cursor or "|" not in cursor:
        raise BadRequest("Invalid cursor format")

    ts_str, row_id = cursor.split("|", 1)
    try:
        return datetime.fromisoformat(ts_str), row_id
    except ValueError as exc:
        raise BadRequest("Invalid cursor format") from exc


def apply_cursor(query: Query, *, model: Type[Any], cursor: Optional[str]) -> Query:
    """
    Restricts ``query`` to rows strictly older than the cursor under the
    ordering ``created_at DESC, id DESC``.
    """
    if not cursor:
        return query

    cursor_ts, cursor_id = decode_cursor(cursor)

    return query.filter(
        or_(
            model.created_at < cursor_ts,
            and_(model.created_at == cursor_ts, model.id < cursor_id),
        )
    )


def paginate_cursor(query: Query, *, model: Type[Any], limit: int) -> tuple[list[Any], CursorMeta]:
    if limit <= 0:
        raise BadRequest("Limit must be greater than zero")

    rows = (
        query.order_by(model.created_at.desc(), model.id.desc())
        .limit(limit + 1)
        .all()
    )

    # One extra row tells us whether another page exists
    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor = None
    if has_more and items:
        next_cursor = encode_cursor(items[-1].created_at, items[-1].id)

    return items, {"has_more": has_more, "next_cursor": next_cursor}

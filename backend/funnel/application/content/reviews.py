from typing import Any, Dict

from funnel.domain.exceptions import ValidationError
from funnel.domain.media import REVIEW_TYPES
from .collections import REVIEWS, append_item, update_item

RATING_RANGE = (1, 5)
EDITABLE_FIELDS = ("source", "name", "event", "quote", "rating", "image_url")


def clamp_rating(value: Any) -> int:
    low, high = RATING_RANGE
    try:
        rating = int(value)
    except (TypeError, ValueError):
        return high
    return max(low, min(high, rating))


def _text(value: Any):
    return str(value or "").strip() or None


def build_review_payload(data: Dict[str, Any]) -> dict:
    review_type = data.get("type", "text")
    if review_type not in REVIEW_TYPES:
        raise ValidationError(f"Review type must be one of {', '.join(REVIEW_TYPES)}")

    payload = {column: None for column in REVIEWS.columns}
    payload["type"] = review_type

    if review_type == "text":
        quote = _text(data.get("quote"))
        if not quote:
            raise ValidationError("Quote is required.")
        payload.update(
            quote=quote,
            name=_text(data.get("name")),
            event=_text(data.get("event")),
            rating=clamp_rating(data.get("rating", RATING_RANGE[1])),
        )
    else:
        image_url = _text(data.get("image_url"))
        if not image_url:
            raise ValidationError("Screenshot reviews need image_url")
        payload.update(image_url=image_url, source=_text(data.get("source")) or "Screenshot")

    return payload


def add_review(*, session, profile_id: str, data: Dict[str, Any]):
    return append_item(
        session=session,
        kind=REVIEWS,
        profile_id=profile_id,
        payload=build_review_payload(data),
    )


def update_review(*, session, profile_id: str, review_id: str, data: Dict[str, Any]):
    changes = {}
    for field in EDITABLE_FIELDS:
        if field not in data:
            continue
        value = clamp_rating(data[field]) if field == "rating" else _text(data[field])
        if field == "quote" and not value:
            continue
        changes[field] = value

    return update_item(
        session=session,
        kind=REVIEWS,
        profile_id=profile_id,
        item_id=review_id,
        changes=changes,
    )

from typing import Any, Dict

from funnel.domain.exceptions import ValidationError
from funnel.domain.media import GALLERY_KINDS, to_youtube_embed
from .collections import GALLERY, append_item

# kind -> column that must carry the media URL
REQUIRED_URL = {
    "image": "image_url",
    "youtube": "youtube_url",
    "mp4": "mp4_url",
}


def build_gallery_payload(data: Dict[str, Any]) -> dict:
    kind = data.get("kind")
    if kind not in GALLERY_KINDS:
        raise ValidationError(f"Gallery kind must be one of {', '.join(GALLERY_KINDS)}")

    payload = {column: None for column in GALLERY.columns}
    payload["kind"] = kind
    payload["title"] = str(data.get("title") or "").strip() or None
    payload["poster_url"] = str(data.get("poster_url") or "").strip() or None

    url_column = REQUIRED_URL[kind]
    url = str(data.get(url_column) or data.get("url") or "").strip()
    if kind == "youtube":
        url = to_youtube_embed(url)
    if not url:
        raise ValidationError(f"{kind} items need {url_column}")

    payload[url_column] = url
    return payload


def add_gallery_item(*, session, profile_id: str, data: Dict[str, Any]):
    return append_item(
        session=session,
        kind=GALLERY,
        profile_id=profile_id,
        payload=build_gallery_payload(data),
    )

import re
from urllib.parse import urlparse, parse_qs

GALLERY_KINDS = ("image", "youtube", "mp4")
REVIEW_TYPES = ("image", "text")

_BARE_VIDEO_ID = re.compile(r"^[A-Za-z0-9_-]{8,}$")


def to_youtube_embed(value: str) -> str:
    """
    Normalizes a YouTube watch URL, short link or bare video id to an
    embed URL. Anything unrecognised is returned unchanged.
    """
    url = (value or "").strip()
    if not url:
        return ""

    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        if _BARE_VIDEO_ID.match(url):
            return f"https://www.youtube.com/embed/{url}"
        return url

    if "youtu.be" in parsed.netloc:
        video_id = parsed.path.lstrip("/")
        return f"https://www.youtube.com/embed/{video_id}"

    video_id = parse_qs(parsed.query).get("v", [""])[0]
    if video_id:
        return f"https://www.youtube.com/embed/{video_id}"

    return url

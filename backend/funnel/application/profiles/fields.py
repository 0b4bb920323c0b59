import re
from typing import Any, List

from funnel.domain.exceptions import ValidationError
from funnel.models.profile import THEMES

SLUG_PATTERN = re.compile(r"^[a-z0-9-]{3,40}$")
ACCENT_PATTERN = re.compile(r"^#[0-9a-fA-F]{3,8}$")
DISPLAY_NAME_LIMITS = (2, 80)


def parse_email_list(value: Any) -> List[str]:
    """Accepts a list or a comma-separated string; drops blanks."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(email).strip() for email in value if str(email).strip()]


def clean_display_name(value: Any) -> str:
    name = str(value or "").strip()
    low, high = DISPLAY_NAME_LIMITS
    if not low <= len(name) <= high:
        raise ValidationError(f"Display name must be {low}-{high} characters")
    return name


def clean_slug(value: Any) -> str:
    slug = str(value or "").strip()
    if not SLUG_PATTERN.match(slug):
        raise ValidationError("Slug must be 3-40 characters of a-z, 0-9 or '-'")
    return slug


def clean_theme(value: Any) -> str:
    if value not in THEMES:
        raise ValidationError(f"Theme must be one of {', '.join(THEMES)}")
    return value


def clean_accent_color(value: Any) -> str:
    color = str(value or "").strip()
    if not ACCENT_PATTERN.match(color):
        raise ValidationError("Accent color must be a hex color such as #27c26a")
    return color


def clean_optional_text(value: Any) -> str | None:
    text = str(value or "").strip()
    return text or None


def clean_packages(value: Any) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError("Packages must be a list")

    packages = []
    for item in value:
        if not isinstance(item, dict) or not str(item.get("name") or "").strip():
            raise ValidationError("Every package needs a name")
        packages.append({
            "name": str(item["name"]).strip(),
            "price": clean_optional_text(item.get("price")),
            "description": clean_optional_text(item.get("description")),
        })
    return packages

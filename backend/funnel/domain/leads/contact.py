from typing import Mapping, Optional
from urllib.parse import quote

VISITOR_GREETING = "Hi! I just submitted a booking request. Can you confirm availability?"

# (payload key, label) pairs summarised in WhatsApp messages
WA_SUMMARY_FIELDS = (
    ("full_name", "Name"),
    ("phone", "Phone"),
    ("email", "Email"),
    ("event_date", "Event Date"),
    ("event_location", "Location"),
    ("budget_range", "Budget"),
    ("message", "Message"),
)


def digits_only(number: Optional[str]) -> str:
    return "".join(ch for ch in (number or "") if ch.isdigit())


def whatsapp_link(number: Optional[str], text: str = "") -> Optional[str]:
    digits = digits_only(number)
    if not digits:
        return None

    link = f"https://wa.me/{digits}"
    if text:
        link += f"?text={quote(text)}"
    return link


def tel_link(phone: Optional[str]) -> Optional[str]:
    if not phone or not digits_only(phone):
        return None
    cleaned = "".join(ch for ch in phone.strip() if ch.isdigit() or ch == "+")
    return f"tel:{cleaned}"


def mailto_link(email: Optional[str], subject: Optional[str] = None) -> Optional[str]:
    email = (email or "").strip()
    if not email or "@" not in email:
        return None

    link = f"mailto:{email}"
    if subject:
        link += f"?subject={quote(subject)}"
    return link


def build_wa_text(payload: Mapping[str, str]) -> str:
    lines = [
        f"{label}: {payload[key]}"
        for key, label in WA_SUMMARY_FIELDS
        if payload.get(key)
    ]
    return "New booking inquiry:\n" + "\n".join(lines)


def lead_contact_links(lead, display_name: str) -> dict:
    """Contact actions offered for a lead in the owner's inbox."""
    name = (lead.form_data or {}).get("full_name", "").strip()
    greeting = f"Hi {name}!" if name else "Hi!"
    text = f"{greeting} Thanks for your booking request with {display_name}."

    return {
        "whatsapp": whatsapp_link(lead.phone, text),
        "phone": tel_link(lead.phone),
        "email": mailto_link(lead.email, f"Your booking request with {display_name}"),
    }

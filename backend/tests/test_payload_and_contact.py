from types import SimpleNamespace

from funnel.domain.forms.payload import LeadPayload
from funnel.domain.leads.contact import (
    VISITOR_GREETING,
    build_wa_text,
    lead_contact_links,
    mailto_link,
    tel_link,
    whatsapp_link,
)


def test_payload_drops_reserved_and_blank_keys():
    payload = LeadPayload.from_pairs([
        ("profile_slug", "studio-one"),
        ("", "ignored"),
        ("full_name", "Ada"),
    ])

    assert dict(payload) == {"full_name": "Ada"}


def test_payload_coerces_non_strings_to_empty():
    payload = LeadPayload({"photo": object(), "count": 3, "note": "hi"})

    assert payload.to_dict() == {"photo": "", "count": "", "note": "hi"}


def test_payload_last_value_wins():
    payload = LeadPayload.from_pairs([("budget", "low"), ("budget", "high")])

    assert payload["budget"] == "high"


def test_payload_contact_values_are_stripped():
    payload = LeadPayload({"phone": "  +1 555 0100 ", "email": "   "})

    assert payload.phone == "+1 555 0100"
    assert payload.email is None


def test_whatsapp_link_keeps_digits_and_encodes_text():
    link = whatsapp_link("+1 (555) 010-2030", VISITOR_GREETING)

    assert link.startswith("https://wa.me/15550102030?text=")
    assert "Hi%21%20I%20just%20submitted" in link


def test_whatsapp_link_requires_digits():
    assert whatsapp_link(None) is None
    assert whatsapp_link("n/a") is None


def test_tel_and_mailto_links():
    assert tel_link(" +1 (555) 010-2030 ") == "tel:+15550102030"
    assert tel_link("") is None
    assert mailto_link("ada@example.com", "Hello there") == "mailto:ada@example.com?subject=Hello%20there"
    assert mailto_link("not-an-email") is None


def test_wa_text_summarises_known_fields_only():
    text = build_wa_text({"full_name": "Ada", "event_date": "2025-06-01", "unknown": "x", "message": ""})

    assert text == "New booking inquiry:\nName: Ada\nEvent Date: 2025-06-01"


def test_lead_contact_links_greet_by_name():
    lead = SimpleNamespace(form_data={"full_name": "Ada"}, phone="+44 7700 900123", email="ada@example.com")

    links = lead_contact_links(lead, "Studio One")

    assert links["whatsapp"].startswith("https://wa.me/447700900123?text=Hi%20Ada%21")
    assert links["phone"] == "tel:+447700900123"
    assert links["email"].startswith("mailto:ada@example.com?subject=")


def test_lead_contact_links_without_contact_details():
    lead = SimpleNamespace(form_data={}, phone=None, email=None)

    assert lead_contact_links(lead, "Studio One") == {"whatsapp": None, "phone": None, "email": None}

import requests
from flask import current_app
from markupsafe import escape

from funnel.domain.leads.contact import build_wa_text

RELAY_TIMEOUT_SECONDS = 10


def render_lead_summary(profile, lead, labelled_fields) -> str:
    rows = "".join(
        f"<tr><td style=\"padding:4px 12px 4px 0\"><strong>{escape(item['label'])}</strong></td>"
        f"<td style=\"padding:4px 0\">{escape(item['value']) or '-'}</td></tr>"
        for item in labelled_fields
    )
    return (
        '<div style="font-family:Arial,sans-serif;line-height:1.5">'
        '<h2 style="margin:0 0 8px">New quote request</h2>'
        f'<p style="margin:0 0 12px"><strong>Profile:</strong> {escape(profile.display_name)} (/{escape(profile.slug)})</p>'
        f'<p style="margin:0 0 12px"><strong>Phone:</strong> {escape(lead.phone or "-")}<br/>'
        f'<strong>Email:</strong> {escape(lead.email or "-")}<br/>'
        f'<strong>WhatsApp:</strong> {escape(profile.whatsapp_number or "-")}</p>'
        f'<table style="border-collapse:collapse">{rows}</table>'
        '</div>'
    )


def relay_lead(profile, lead, labelled_fields) -> bool:
    """
    Emails a lead summary to the profile's notification addresses through
    Resend. Returns True when the API accepted the message. Without an API
    key, or without recipients, nothing is sent.
    """
    api_key = current_app.config.get("RESEND_API_KEY")
    if not api_key:
        current_app.logger.debug("RESEND_API_KEY not set; lead relay disabled")
        return False

    recipients = [email for email in (profile.notification_emails or []) if email]
    if not recipients:
        return False

    message = {
        "from": current_app.config["RESEND_FROM_EMAIL"],
        "to": recipients,
        "subject": f"New quote request for {profile.display_name}",
        "html": render_lead_summary(profile, lead, labelled_fields),
        "text": build_wa_text(lead.form_data or {}),
    }

    try:
        response = requests.post(
            current_app.config["RESEND_API_URL"],
            json=message,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=RELAY_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        current_app.logger.warning("Lead relay for %s failed: %s", profile.slug, exc)
        return False

    if response.status_code >= 400:
        current_app.logger.warning(
            "Lead relay for %s rejected (%s): %s",
            profile.slug,
            response.status_code,
            response.text,
        )
        return False

    current_app.logger.info("Lead %s relayed to %d recipient(s)", lead.id, len(recipients))
    return True

import csv
import io
from typing import Iterable, List

from funnel.models.lead import Lead
from funnel.application.forms.form_builder import public_schema
from funnel.application.profiles.access import authorize_profile

FIXED_COLUMNS = ["created_at", "status", "phone", "email"]


def export_columns(schema_keys: Iterable[str], leads: Iterable[Lead]) -> List[str]:
    """Fixed columns, then schema keys, then keys only found on older leads."""
    columns = list(FIXED_COLUMNS)
    seen = set(columns)

    for key in schema_keys:
        if key not in seen:
            columns.append(key)
            seen.add(key)

    for lead in leads:
        for key in (lead.form_data or {}):
            if key not in seen:
                columns.append(key)
                seen.add(key)

    return columns


def render_leads_csv(leads: List[Lead], schema_keys: Iterable[str]) -> str:
    columns = export_columns(schema_keys, leads)

    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(columns)

    for lead in leads:
        data = lead.form_data or {}
        fixed = {
            "created_at": lead.created_at.isoformat() if lead.created_at else "",
            "status": lead.status,
            "phone": lead.phone or "",
            "email": lead.email or "",
        }
        writer.writerow([
            fixed[column] if column in fixed else data.get(column, "")
            for column in columns
        ])

    return output.getvalue()


def export_leads_csv(*, session, profile_id: str) -> tuple[str, str]:
    """Returns (filename, csv text) for every lead on the profile."""
    profile = authorize_profile(session, profile_id)

    leads = (
        Lead.query
        .filter_by(profile_id=profile_id)
        .order_by(Lead.created_at.desc(), Lead.id.desc())
        .all()
    )
    schema_keys = [descriptor.key for descriptor in public_schema(profile_id)]

    return f"{profile.slug}-leads.csv", render_leads_csv(leads, schema_keys)

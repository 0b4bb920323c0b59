from typing import Any, Dict, Sequence

from funnel.domain.forms.schema import FieldDescriptor, label_payload
from funnel.domain.leads.contact import lead_contact_links


def normalize_lead(lead, *, descriptors: Sequence[FieldDescriptor], display_name: str) -> Dict[str, Any]:
    form_data = lead.form_data or {}

    return {
        "id": lead.id,
        "status": lead.status,
        "phone": lead.phone,
        "email": lead.email,
        "created_at": lead.created_at.isoformat() if lead.created_at else None,
        "contacted_at": lead.contacted_at.isoformat() if lead.contacted_at else None,
        "booked_at": lead.booked_at.isoformat() if lead.booked_at else None,
        "form_data": form_data,
        "fields": label_payload(descriptors, form_data),
        "contact": lead_contact_links(lead, display_name),
    }

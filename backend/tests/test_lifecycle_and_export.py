import csv
import io
from datetime import datetime
from types import SimpleNamespace

import pytest

from funnel.application.leads.export_leads import export_columns, render_leads_csv
from funnel.domain.exceptions import InvalidTransition
from funnel.domain.lifecycle.lead import apply_lead_status
from funnel.domain.lifecycle.profile import assert_profile_transition

NOW = datetime(2025, 6, 1, 12, 0, 0)


def make_lead(status="new", **form_data):
    return SimpleNamespace(
        status=status,
        contacted_at=None,
        booked_at=None,
        created_at=datetime(2025, 5, 30, 9, 15, 0),
        phone=form_data.get("phone"),
        email=form_data.get("email"),
        form_data=form_data,
    )


def test_contacting_a_lead_stamps_contacted_at():
    lead = make_lead()

    assert apply_lead_status(lead, "contacted", now=NOW)
    assert lead.status == "contacted"
    assert lead.contacted_at == NOW
    assert lead.booked_at is None


def test_booking_a_new_lead_stamps_both():
    lead = make_lead()

    apply_lead_status(lead, "booked", now=NOW)

    assert lead.contacted_at == NOW
    assert lead.booked_at == NOW


def test_existing_stamps_are_kept():
    earlier = datetime(2025, 1, 1)
    lead = make_lead(status="contacted")
    lead.contacted_at = earlier

    apply_lead_status(lead, "booked", now=NOW)

    assert lead.contacted_at == earlier


def test_same_status_is_noop():
    lead = make_lead(status="booked")

    assert apply_lead_status(lead, "booked", now=NOW) is False
    assert lead.booked_at is None


def test_lead_can_be_reset_to_new():
    lead = make_lead(status="booked")

    assert apply_lead_status(lead, "new", now=NOW)
    assert lead.status == "new"


def test_unknown_lead_status_is_rejected():
    with pytest.raises(InvalidTransition):
        apply_lead_status(make_lead(), "archived", now=NOW)


@pytest.mark.parametrize("from_status, to_status", [
    ("pending", "active"),
    ("pending", "rejected"),
    ("rejected", "active"),
    ("active", "rejected"),
])
def test_allowed_profile_transitions(from_status, to_status):
    assert_profile_transition(from_status=from_status, to_status=to_status)


@pytest.mark.parametrize("from_status, to_status", [
    ("active", "pending"),
    ("rejected", "pending"),
    ("active", "active"),
])
def test_illegal_profile_transitions(from_status, to_status):
    with pytest.raises(InvalidTransition):
        assert_profile_transition(from_status=from_status, to_status=to_status)


def test_csv_doubles_quotes_inside_quoted_cells():
    lead = make_lead(message='He said "hi", ok')

    body = render_leads_csv([lead], ["message"])

    assert '"He said ""hi"", ok"' in body


def test_csv_quotes_newlines():
    lead = make_lead(message="line one\nline two")

    rows = list(csv.reader(io.StringIO(render_leads_csv([lead], ["message"]))))

    assert rows[1][-1] == "line one\nline two"


def test_csv_columns_fixed_then_schema_then_extras():
    leads = [
        make_lead(full_name="Ada", phone="+1 555", legacy="x"),
        make_lead(full_name="Bo", email="bo@example.com", other="y"),
    ]

    assert export_columns(["full_name", "phone", "email", "event_date"], leads) == [
        "created_at", "status", "phone", "email", "full_name", "event_date", "legacy", "other",
    ]


def test_csv_rows_fill_missing_keys_with_blanks():
    lead = make_lead(full_name="Ada", phone="+1 555")

    rows = list(csv.reader(io.StringIO(render_leads_csv([lead], ["full_name", "event_date"]))))

    assert rows[0] == ["created_at", "status", "phone", "email", "full_name", "event_date"]
    assert rows[1] == ["2025-05-30T09:15:00", "new", "+1 555", "", "Ada", ""]


def test_booked_lead_cannot_step_back_to_contacted():
    lead = make_lead(status="booked")

    with pytest.raises(InvalidTransition):
        apply_lead_status(lead, "contacted", now=NOW)

    assert lead.status == "booked"

from funnel.extensions import db
from funnel.models.audit_log import AuditLog
from funnel.models.form_field import FormField
from funnel.models.platform_settings import PlatformSettings
from funnel.models.profile import Profile

from conftest import auth_headers


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_register_then_login(client):
    registered = client.post("/api/v1/auth/register", json={"email": "New@Example.com", "password": "s3cret-pass"})
    assert registered.status_code == 201
    assert registered.get_json()["email"] == "new@example.com"

    login = client.post("/api/v1/auth/login", json={"email": "new@example.com", "password": "s3cret-pass"})
    assert login.status_code == 200
    assert "access_token" in login.get_json()

    wrong = client.post("/api/v1/auth/login", json={"email": "new@example.com", "password": "nope-nope"})
    assert wrong.status_code == 401


def test_register_rejects_duplicates(client, owner):
    response = client.post("/api/v1/auth/register", json={"email": owner.email, "password": "password123"})

    assert response.status_code == 409


def test_profile_routes_require_a_token(client):
    assert client.get("/api/v1/profiles").status_code == 401


def test_create_profile_starts_pending_and_seeds_the_form(client, owner_headers):
    response = client.post(
        "/api/v1/profiles",
        json={"slug": "studio-one", "display_name": "Studio One"},
        headers=owner_headers,
    )

    assert response.status_code == 201
    body = response.get_json()
    assert body["profile"]["status"] == "pending"

    fields = (
        FormField.query.filter_by(profile_id=body["profile"]["id"])
        .order_by(FormField.order_index)
        .all()
    )
    assert [f.field_key for f in fields] == [
        "full_name", "phone", "email", "event_date", "event_location", "budget_range", "message",
    ]
    assert [f.order_index for f in fields] == [10, 20, 30, 40, 50, 60, 70]


def test_create_profile_active_when_approval_not_required(client, owner_headers):
    db.session.add(PlatformSettings(id=1, profile_creation_mode="self_serve", require_approval=False))
    db.session.commit()

    response = client.post(
        "/api/v1/profiles",
        json={"slug": "studio-two", "display_name": "Studio Two"},
        headers=owner_headers,
    )

    assert response.get_json()["profile"]["status"] == "active"


def test_admin_only_mode_blocks_self_serve(client, owner_headers, admin_headers):
    db.session.add(PlatformSettings(id=1, profile_creation_mode="admin_only", require_approval=True))
    db.session.commit()

    blocked = client.post(
        "/api/v1/profiles",
        json={"slug": "studio-three", "display_name": "Studio Three"},
        headers=owner_headers,
    )
    assert blocked.status_code == 403
    assert blocked.get_json()["message"] == "Profile creation is currently admin-only."
    assert Profile.query.count() == 0

    allowed = client.post(
        "/api/v1/profiles",
        json={"slug": "studio-three", "display_name": "Studio Three"},
        headers=admin_headers,
    )
    assert allowed.status_code == 201


def test_invalid_and_duplicate_slugs(client, owner_headers, pending_profile):
    invalid = client.post("/api/v1/profiles", json={"slug": "No Spaces", "display_name": "X Y"}, headers=owner_headers)
    assert invalid.status_code == 400
    assert invalid.get_json()["error"] == "ValidationError"

    duplicate = client.post(
        "/api/v1/profiles",
        json={"slug": pending_profile.slug, "display_name": "Another"},
        headers=owner_headers,
    )
    assert duplicate.status_code == 409


def test_only_platform_admin_can_approve(client, owner_headers, admin_headers, pending_profile):
    denied = client.post(f"/api/v1/profiles/{pending_profile.id}/approve", headers=owner_headers)
    assert denied.status_code == 403

    approved = client.post(f"/api/v1/profiles/{pending_profile.id}/approve", headers=admin_headers)
    assert approved.status_code == 200
    profile = approved.get_json()["profile"]
    assert profile["status"] == "active"
    assert profile["approved_at"] is not None

    again = client.post(f"/api/v1/profiles/{pending_profile.id}/approve", headers=admin_headers)
    assert again.status_code == 400
    assert again.get_json()["error"] == "InvalidTransition"


def test_reject_records_reason(client, admin_headers, pending_profile):
    response = client.post(
        f"/api/v1/profiles/{pending_profile.id}/reject",
        json={"reason": "Incomplete details"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["profile"]["rejection_reason"] == "Incomplete details"
    assert AuditLog.query.filter_by(action="profile.reject").count() == 1


def test_platform_profile_list_filters_by_status(client, admin_headers, owner_headers, pending_profile):
    pending = client.get("/api/v1/platform/profiles?status=pending", headers=admin_headers)
    assert [p["slug"] for p in pending.get_json()["items"]] == ["studio-one"]

    assert client.get("/api/v1/platform/profiles", headers=owner_headers).status_code == 403


def test_platform_settings_round_trip(client, admin_headers, owner_headers):
    assert client.get("/api/v1/platform/settings", headers=admin_headers).get_json() == {
        "profile_creation_mode": "self_serve",
        "require_approval": True,
    }

    saved = client.put(
        "/api/v1/platform/settings",
        json={"profile_creation_mode": "admin_only", "require_approval": False},
        headers=admin_headers,
    )
    assert saved.status_code == 200
    assert PlatformSettings.current().profile_creation_mode == "admin_only"

    bad = client.put("/api/v1/platform/settings", json={"profile_creation_mode": "open"}, headers=admin_headers)
    assert bad.status_code == 400

    assert client.put("/api/v1/platform/settings", json={}, headers=owner_headers).status_code == 403


def test_members_see_their_profiles_only(client, make_user, owner_headers, pending_profile):
    stranger = make_user("stranger@example.com")

    mine = client.get("/api/v1/profiles", headers=owner_headers).get_json()["items"]
    assert [p["slug"] for p in mine] == ["studio-one"]

    theirs = client.get("/api/v1/profiles", headers=auth_headers(stranger)).get_json()["items"]
    assert theirs == []

    forbidden = client.get(f"/api/v1/profiles/{pending_profile.id}", headers=auth_headers(stranger))
    assert forbidden.status_code == 403


def test_update_profile_settings(client, owner_headers, pending_profile):
    response = client.put(
        f"/api/v1/profiles/{pending_profile.id}",
        json={
            "display_name": "Studio One Films",
            "theme": "light",
            "notification_emails": "a@example.com, ,b@example.com",
            "packages": [{"name": "Gold", "price": "$2,000", "description": "Full day"}],
        },
        headers=owner_headers,
    )

    assert response.status_code == 200
    body = response.get_json()
    assert sorted(body["changed"]) == ["display_name", "notification_emails", "packages", "theme"]
    assert body["profile"]["notification_emails"] == ["a@example.com", "b@example.com"]
    assert body["flash_ttl_ms"] == 1200


def test_update_profile_rejects_bad_values(client, owner_headers, pending_profile):
    response = client.put(
        f"/api/v1/profiles/{pending_profile.id}",
        json={"accent_color": "green"},
        headers=owner_headers,
    )

    assert response.status_code == 400


def test_stale_profile_update_conflicts(client, owner_headers, pending_profile):
    stale = client.put(
        f"/api/v1/profiles/{pending_profile.id}",
        json={"hero_headline": "Hello"},
        headers={**owner_headers, "If-Unmodified-Since": "Mon, 01 Jan 2001 00:00:00 GMT"},
    )
    assert stale.status_code == 409

    fresh = client.put(
        f"/api/v1/profiles/{pending_profile.id}",
        json={"hero_headline": "Hello"},
        headers={**owner_headers, "If-Unmodified-Since": "01 Jan 2099 00:00:00 GMT"},
    )
    assert fresh.status_code == 200

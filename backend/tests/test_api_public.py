from funnel.application.content.gallery import add_gallery_item
from funnel.application.profiles.update_profile import update_profile


def test_public_page_requires_active_profile(client, pending_profile):
    assert client.get(f"/p/{pending_profile.slug}").status_code == 404
    assert client.get("/p/nobody").status_code == 404


def test_public_page_document(client, active_profile, owner_session):
    update_profile(
        session=owner_session,
        profile_id=active_profile.id,
        data={"hero_headline": "Films that feel like you"},
    )
    add_gallery_item(
        session=owner_session,
        profile_id=active_profile.id,
        data={"kind": "image", "image_url": "https://cdn.example.com/a.jpg"},
    )

    body = client.get(f"/p/{active_profile.slug}").get_json()

    assert body["profile"]["hero_headline"] == "Films that feel like you"
    assert "notification_emails" not in body["profile"]
    assert [item["image_url"] for item in body["gallery"]] == ["https://cdn.example.com/a.jpg"]
    assert body["reviews"] == []
    assert body["form"]["hidden"] == {"profile_slug": "studio-one"}
    assert [f["key"] for f in body["form"]["fields"]][:3] == ["full_name", "phone", "email"]


def test_whatsapp_redirect(client, active_profile):
    response = client.get(f"/whatsapp?slug={active_profile.slug}")

    assert response.status_code == 302
    assert response.headers["Location"].startswith("https://wa.me/15550102030?text=Hi%21")


def test_whatsapp_redirect_without_number(client):
    response = client.get("/whatsapp?slug=nobody")

    assert response.status_code == 404
    assert response.get_json() == {"error": "No WhatsApp number configured."}


def test_thank_you(client):
    body = client.get("/thank-you?slug=studio-one").get_json()

    assert body["back_url"] == "/p/studio-one"
    assert body["whatsapp_url"] == "/whatsapp?slug=studio-one"

"""
Visitor-facing routes: the public page document, the WhatsApp hand-off
and the thank-you page the lead form redirects to.
"""
from urllib.parse import quote

from flask import Blueprint, jsonify, redirect, request

from funnel.models.profile import Profile
from funnel.application.content.collections import GALLERY, REVIEWS
from funnel.application.forms.form_builder import public_schema
from funnel.domain.leads.contact import VISITOR_GREETING, whatsapp_link
from funnel.normalizers.collection import normalize_entries
from funnel.normalizers.form_field import normalize_descriptor
from funnel.normalizers.profile import normalize_public_profile

public_bp = Blueprint("public", __name__)


def active_profile_or_404(slug: str) -> Profile:
    return Profile.query.filter_by(slug=slug, status="active").first_or_404()


@public_bp.route("/p/<slug>", methods=["GET"])
def public_page(slug):
    profile = active_profile_or_404(slug)

    return jsonify({
        "profile": normalize_public_profile(profile),
        "gallery": normalize_entries(GALLERY.store().load(profile.id)),
        "reviews": normalize_entries(REVIEWS.store().load(profile.id)),
        "form": {
            "action": "/api/v1/leads",
            "method": "POST",
            "hidden": {"profile_slug": profile.slug},
            "fields": [normalize_descriptor(d) for d in public_schema(profile.id)],
        },
    }), 200


@public_bp.route("/whatsapp", methods=["GET"])
def whatsapp_redirect():
    slug = request.args.get("slug", "")
    profile = Profile.query.filter_by(slug=slug, status="active").first()

    link = whatsapp_link(profile.whatsapp_number if profile else None, VISITOR_GREETING)
    if not link:
        return jsonify({"error": "No WhatsApp number configured."}), 404

    return redirect(link, code=302)


@public_bp.route("/thank-you", methods=["GET"])
def thank_you():
    slug = request.args.get("slug", "")

    return jsonify({
        "message": "Thank you! Your request has been received.",
        "back_url": f"/p/{quote(slug)}" if slug else "/",
        "whatsapp_url": f"/whatsapp?slug={quote(slug)}" if slug else None,
    }), 200

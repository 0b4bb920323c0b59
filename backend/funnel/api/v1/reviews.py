from flask import request, jsonify
from flask_jwt_extended import jwt_required

from funnel.application.content.collections import REVIEWS, move_item, open_collection, remove_item
from funnel.application.content.reviews import add_review, update_review
from funnel.normalizers.collection import normalize_entries, normalize_entry, normalize_mutation
from funnel.utils.decorators import session_required
from funnel.utils.order import read_direction
from . import v1_bp


@v1_bp.route("/profiles/<profile_id>/reviews", methods=["GET"])
@jwt_required()
@session_required
def list_reviews(profile_id, session):
    collection = open_collection(session=session, kind=REVIEWS, profile_id=profile_id)
    return jsonify({"items": normalize_entries(collection.entries)}), 200


@v1_bp.route("/profiles/<profile_id>/reviews", methods=["POST"])
@jwt_required()
@session_required
def create_review(profile_id, session):
    data = request.get_json(silent=True) or {}

    result = add_review(session=session, profile_id=profile_id, data=data)
    return jsonify(normalize_mutation(result, normalize_entry, "Review added")), 201


@v1_bp.route("/profiles/<profile_id>/reviews/<review_id>", methods=["PUT"])
@jwt_required()
@session_required
def update_review_view(profile_id, review_id, session):
    data = request.get_json(silent=True) or {}

    result = update_review(session=session, profile_id=profile_id, review_id=review_id, data=data)
    return jsonify(normalize_mutation(result, normalize_entry, "Review saved")), 200


@v1_bp.route("/profiles/<profile_id>/reviews/<review_id>", methods=["DELETE"])
@jwt_required()
@session_required
def delete_review(profile_id, review_id, session):
    result = remove_item(session=session, kind=REVIEWS, profile_id=profile_id, item_id=review_id)
    return jsonify(normalize_mutation(result, normalize_entry, "Review deleted")), 200


@v1_bp.route("/profiles/<profile_id>/reviews/<review_id>/move", methods=["POST"])
@jwt_required()
@session_required
def move_review(profile_id, review_id, session):
    direction = read_direction(request.get_json(silent=True) or {})

    result = move_item(
        session=session, kind=REVIEWS, profile_id=profile_id, item_id=review_id, direction=direction
    )
    return jsonify(normalize_mutation(result, normalize_entry, "Order updated")), 200

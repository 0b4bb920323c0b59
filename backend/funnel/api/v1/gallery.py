from flask import request, jsonify
from flask_jwt_extended import jwt_required

from funnel.application.content.collections import GALLERY, move_item, open_collection, remove_item
from funnel.application.content.gallery import add_gallery_item
from funnel.normalizers.collection import normalize_entries, normalize_entry, normalize_mutation
from funnel.utils.decorators import session_required
from funnel.utils.order import read_direction
from . import v1_bp


@v1_bp.route("/profiles/<profile_id>/gallery", methods=["GET"])
@jwt_required()
@session_required
def list_gallery(profile_id, session):
    collection = open_collection(session=session, kind=GALLERY, profile_id=profile_id)
    return jsonify({"items": normalize_entries(collection.entries)}), 200


@v1_bp.route("/profiles/<profile_id>/gallery", methods=["POST"])
@jwt_required()
@session_required
def create_gallery_item(profile_id, session):
    data = request.get_json(silent=True) or {}

    result = add_gallery_item(session=session, profile_id=profile_id, data=data)
    return jsonify(normalize_mutation(result, normalize_entry, "Gallery item added")), 201


@v1_bp.route("/profiles/<profile_id>/gallery/<item_id>", methods=["DELETE"])
@jwt_required()
@session_required
def delete_gallery_item(profile_id, item_id, session):
    result = remove_item(session=session, kind=GALLERY, profile_id=profile_id, item_id=item_id)
    return jsonify(normalize_mutation(result, normalize_entry, "Gallery item deleted")), 200


@v1_bp.route("/profiles/<profile_id>/gallery/<item_id>/move", methods=["POST"])
@jwt_required()
@session_required
def move_gallery_item(profile_id, item_id, session):
    direction = read_direction(request.get_json(silent=True) or {})

    result = move_item(
        session=session, kind=GALLERY, profile_id=profile_id, item_id=item_id, direction=direction
    )
    return jsonify(normalize_mutation(result, normalize_entry, "Order updated")), 200

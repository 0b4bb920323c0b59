from flask import request, jsonify
from flask_jwt_extended import jwt_required

from funnel.application.forms import form_builder
from funnel.normalizers.collection import normalize_mutation
from funnel.normalizers.form_field import normalize_descriptor, normalize_field_entry
from funnel.utils.decorators import session_required
from funnel.utils.order import read_direction
from . import v1_bp


def _schema_response(result, message: str, created: bool = False):
    body = normalize_mutation(result, normalize_field_entry, message)
    status = 201 if created and result.changed else 200
    return jsonify(body), status


@v1_bp.route("/profiles/<profile_id>/form-fields", methods=["GET"])
@jwt_required()
@session_required
def list_form_fields(profile_id, session):
    schema = form_builder.open_schema(session=session, profile_id=profile_id)

    return jsonify({
        "items": [normalize_field_entry(entry) for entry in schema.fields],
        # What visitors see; the default fields when nothing is stored
        "public": [normalize_descriptor(d) for d in schema.render_schema()],
    }), 200


@v1_bp.route("/profiles/<profile_id>/form-fields", methods=["POST"])
@jwt_required()
@session_required
def create_form_field(profile_id, session):
    data = request.get_json(silent=True) or {}

    schema, result = form_builder.add_field(session=session, profile_id=profile_id, data=data)

    if result is None:
        return jsonify({
            "changed": False,
            "message": None,
            "item": None,
            "items": [normalize_field_entry(entry) for entry in schema.fields],
        }), 200

    return _schema_response(result, "Field added", created=True)


@v1_bp.route("/profiles/<profile_id>/form-fields/<field_id>", methods=["PUT"])
@jwt_required()
@session_required
def update_form_field(profile_id, field_id, session):
    patch = request.get_json(silent=True) or {}

    schema, result = form_builder.update_field(
        session=session, profile_id=profile_id, field_id=field_id, patch=patch
    )
    return _schema_response(result, "Field saved")


@v1_bp.route("/profiles/<profile_id>/form-fields/<field_id>", methods=["DELETE"])
@jwt_required()
@session_required
def delete_form_field(profile_id, field_id, session):
    schema, result = form_builder.delete_field(session=session, profile_id=profile_id, field_id=field_id)
    return _schema_response(result, "Field deleted")


@v1_bp.route("/profiles/<profile_id>/form-fields/<field_id>/move", methods=["POST"])
@jwt_required()
@session_required
def move_form_field(profile_id, field_id, session):
    direction = read_direction(request.get_json(silent=True) or {})

    schema, result = form_builder.move_field(
        session=session, profile_id=profile_id, field_id=field_id, direction=direction
    )
    return _schema_response(result, "Order updated")

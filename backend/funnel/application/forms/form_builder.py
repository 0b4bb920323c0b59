"""
Owner-side form builder. Thin wrappers that authorize the caller, open
the profile's ``FormSchema`` against the database and audit what changed.
"""
from typing import Any, Dict, Optional

from flask import current_app

from funnel.models.form_field import FormField
from funnel.domain.exceptions import PersistenceError
from funnel.domain.forms.schema import FieldDescriptor, FieldSpec, FormSchema, render_schema
from funnel.domain.ordering.collection import MutationResult
from funnel.persistence.ordered_store import SqlOrderedStore
from funnel.utils.audit import log_action
from funnel.utils.transaction import transactional
from funnel.application.profiles.access import authorize_profile


def field_spec_from_row(row: FormField) -> FieldSpec:
    return FieldSpec(
        label=row.label,
        field_key=row.field_key,
        type=row.type,
        required=bool(row.required),
        options=tuple(row.options or ()),
    )


def field_store() -> SqlOrderedStore:
    return SqlOrderedStore(FormField, field_spec_from_row)


def load_schema(profile_id: str) -> FormSchema:
    store = field_store()
    return FormSchema(profile_id, store, store.load)


def open_schema(*, session, profile_id: str) -> FormSchema:
    authorize_profile(session, profile_id)
    return load_schema(profile_id)


def public_schema(profile_id: str) -> list[FieldDescriptor]:
    """Descriptors for the public form; falls back to the default fields."""
    return render_schema(field_store().load(profile_id))


def add_field(*, session, profile_id: str, data: Dict[str, Any]) -> tuple[FormSchema, Optional[MutationResult]]:
    schema = open_schema(session=session, profile_id=profile_id)
    result = schema.add_field(
        data.get("label", ""),
        data.get("type", "text"),
        data.get("required", False),
        data.get("options"),
    )
    if result is not None:
        _finish(session, profile_id, result)
    return schema, result


def update_field(*, session, profile_id: str, field_id: str, patch: Dict[str, Any]) -> tuple[FormSchema, MutationResult]:
    schema = open_schema(session=session, profile_id=profile_id)
    result = schema.update_field(field_id, patch)
    _finish(session, profile_id, result, payload={"fields": sorted(k for k in patch if k != "field_key")})
    return schema, result


def delete_field(*, session, profile_id: str, field_id: str) -> tuple[FormSchema, MutationResult]:
    schema = open_schema(session=session, profile_id=profile_id)
    result = schema.delete_field(field_id)
    _finish(session, profile_id, result)
    return schema, result


def move_field(*, session, profile_id: str, field_id: str, direction: int) -> tuple[FormSchema, MutationResult]:
    schema = open_schema(session=session, profile_id=profile_id)
    result = schema.move_field(field_id, direction)
    _finish(session, profile_id, result, payload={"direction": direction})
    return schema, result


def _finish(session, profile_id: str, result: MutationResult, payload: dict | None = None) -> None:
    if result.error:
        current_app.logger.warning("Form builder %s failed on %s: %s", result.action, profile_id, result.error)
        raise PersistenceError(result.error)

    if result.changed:
        with transactional():
            log_action(
                session=session,
                action=f"form_field.{result.action}",
                entity_type="form_field",
                entity_id=result.subject.id if result.subject else None,
                profile_id=profile_id,
                payload=payload,
            )

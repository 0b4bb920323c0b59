"""
Per-profile lead form schema.

A profile's form is an ordered collection of ``FieldSpec`` payloads. The
same schema drives the public form (``render_schema``) and the labelling
of submitted leads (``label_payload``). Keys are derived from labels once
and never change afterwards.
"""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from funnel.domain.exceptions import PersistenceError
from funnel.domain.invariants.form_schema import assert_select_options, assert_unique_field_keys
from funnel.domain.invariants.ordering import ORDER_STEP
from funnel.domain.ordering.collection import Entry, MutationResult, OrderedCollection

logger = logging.getLogger(__name__)

FIELD_TYPES = ("text", "email", "phone", "date", "select", "textarea")

# Downstream lead handling depends on these keys being present
PROTECTED_KEYS = frozenset({"email", "phone", "whatsapp", "request_type"})
LOCKED_TYPES = {"email": "email", "phone": "phone"}
LOCKED_REQUIRED_KEYS = frozenset({"email"})

HTML_INPUT_TYPES = {"phone": "tel"}

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class FieldSpec:
    label: str
    field_key: str
    type: str = "text"
    required: bool = False
    options: tuple = ()

    def as_columns(self) -> dict:
        columns = asdict(self)
        columns["options"] = list(self.options)
        return columns


@dataclass(frozen=True)
class FieldDescriptor:
    key: str
    label: str
    type: str
    input_type: str
    required: bool
    options: tuple
    order_index: int
    id: Optional[str] = None


BUDGET_OPTIONS = ("$500–$1,000", "$1,000–$2,000", "$2,000–$3,000", "$3,000+")

# Written for every new profile
SEED_FIELDS = (
    FieldSpec("Full name", "full_name", "text", True),
    FieldSpec("Phone", "phone", "phone"),
    FieldSpec("Email", "email", "email"),
    FieldSpec("Event date", "event_date", "date"),
    FieldSpec("Event location", "event_location", "text"),
    FieldSpec("Budget range", "budget_range", "select", options=BUDGET_OPTIONS),
    FieldSpec("Message", "message", "textarea"),
)

# Shown when a profile has no fields at all; never persisted
DEFAULT_SCHEMA = (
    FieldSpec("Full name", "full_name", "text", True),
    FieldSpec("Phone", "phone", "phone"),
    FieldSpec("Email", "email", "email"),
    FieldSpec("Event date", "event_date", "date"),
)


def slugify_key(label: str) -> str:
    return _NON_ALNUM.sub("_", (label or "").strip().lower()).strip("_")


def unique_field_key(label: str, used_keys: Iterable[str]) -> str:
    used = set(used_keys)
    base = slugify_key(label) or "field"

    key = base
    n = 2
    while key in used:
        key = f"{base}_{n}"
        n += 1
    return key


def parse_options(raw: Any) -> tuple:
    """Accepts a list of strings or a comma-separated string."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = raw.split(",")
    return tuple(str(option).strip() for option in raw if str(option).strip())


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def describe(spec: FieldSpec, order_index: int, field_id: Optional[str] = None) -> FieldDescriptor:
    return FieldDescriptor(
        key=spec.field_key,
        label=spec.label,
        type=spec.type,
        input_type=HTML_INPUT_TYPES.get(spec.type, spec.type),
        required=spec.required,
        options=spec.options if spec.type == "select" else (),
        order_index=order_index,
        id=field_id,
    )


def render_schema(entries: Sequence[Entry]) -> list[FieldDescriptor]:
    if not entries:
        return [
            describe(spec, ORDER_STEP * position)
            for position, spec in enumerate(DEFAULT_SCHEMA, start=1)
        ]

    ordered = sorted(entries, key=lambda entry: entry.order_index)
    return [describe(entry.payload, entry.order_index, entry.id) for entry in ordered]


def label_payload(descriptors: Sequence[FieldDescriptor], payload: Mapping[str, str]) -> list[dict]:
    """
    Pairs submitted values with their field labels, in schema order. Keys
    the schema no longer knows are kept at the end, labelled by key.
    """
    labelled = []
    known = set()

    for descriptor in descriptors:
        known.add(descriptor.key)
        if descriptor.key in payload:
            labelled.append({
                "key": descriptor.key,
                "label": descriptor.label,
                "value": payload[descriptor.key],
            })

    for key, value in payload.items():
        if key not in known:
            labelled.append({"key": key, "label": key, "value": value})

    return labelled


class FormSchema:
    """
    Mutable view over one profile's fields.

    Failed writes are reported on the returned result and the schema is
    reloaded from ``loader`` so the caller always sees stored truth.
    """

    def __init__(self, profile_id: str, store, loader: Callable[[str], Iterable[Entry]]):
        self.profile_id = profile_id
        self._store = store
        self._loader = loader
        self.reload()

    def reload(self) -> None:
        self.collection = OrderedCollection(self.profile_id, self._loader(self.profile_id), self._store)

    @property
    def fields(self):
        return self.collection.entries

    def keys(self) -> set:
        return {entry.payload.field_key for entry in self.fields}

    def find(self, field_id: str) -> Optional[Entry]:
        return self.collection.find(field_id)

    def add_field(self, label: str, type: str = "text", required: bool = False, options: Any = None) -> Optional[MutationResult]:
        label = str(label or "").strip()
        if not label or type not in FIELD_TYPES:
            return None

        spec = FieldSpec(
            label=label,
            field_key=unique_field_key(label, self.keys()),
            type=type,
            required=as_bool(required),
            options=parse_options(options) if type == "select" else (),
        )
        assert_unique_field_keys([entry.payload for entry in self.fields] + [spec])

        result = self.collection.append(spec)
        if not result.ok:
            self._recover(result)
        return result

    def update_field(self, field_id: str, patch: Mapping[str, Any]) -> MutationResult:
        entry = self.find(field_id)
        if entry is None:
            return MutationResult("revise", self.fields, self.fields, changed=False)

        changes = self._clean_patch(entry.payload, patch or {})
        if not changes:
            return MutationResult("revise", self.fields, self.fields, changed=False, subject=entry)

        updated = replace(entry.payload, **changes)
        if updated.type != "select" and updated.options:
            updated = replace(updated, options=())
            changes["options"] = ()
        assert_select_options(updated)

        result = self.collection.revise(field_id, updated)

        columns = {key: (list(value) if key == "options" else value) for key, value in changes.items()}
        try:
            self._store.update_fields(self.profile_id, field_id, columns)
        except PersistenceError as exc:
            result.error = str(exc) or "Failed to save field"
            self._recover(result)

        return result

    def delete_field(self, field_id: str) -> MutationResult:
        entry = self.find(field_id)
        if entry is None or entry.payload.field_key in PROTECTED_KEYS:
            return MutationResult("remove", self.fields, self.fields, changed=False, subject=entry)

        result = self.collection.remove(field_id)
        if not result.ok:
            self._recover(result)
        return result

    def move_field(self, field_id: str, direction: int) -> MutationResult:
        result = self.collection.move(field_id, direction)
        if not result.ok:
            self._recover(result)
        return result

    def render_schema(self) -> list[FieldDescriptor]:
        return render_schema(self.fields)

    def label_payload(self, payload: Mapping[str, str]) -> list[dict]:
        return label_payload(self.render_schema(), payload)

    def _clean_patch(self, spec: FieldSpec, patch: Mapping[str, Any]) -> dict:
        changes: dict = {}

        if "label" in patch:
            label = str(patch["label"] or "").strip()
            if label and label != spec.label:
                changes["label"] = label

        if "type" in patch:
            new_type = patch["type"]
            locked = LOCKED_TYPES.get(spec.field_key)
            if new_type in FIELD_TYPES and new_type != spec.type and locked in (None, new_type):
                changes["type"] = new_type

        if "required" in patch and spec.field_key not in LOCKED_REQUIRED_KEYS:
            required = as_bool(patch["required"])
            if required != spec.required:
                changes["required"] = required

        if "options" in patch:
            options = parse_options(patch["options"])
            if options != spec.options:
                changes["options"] = options

        return changes

    def _recover(self, result: MutationResult) -> None:
        logger.warning(
            "Form schema %s on profile %s failed, reloading: %s",
            result.action,
            self.profile_id,
            result.error,
        )
        self.reload()

from typing import Any, Dict

from funnel.domain.forms.schema import FieldDescriptor, describe


def normalize_descriptor(descriptor: FieldDescriptor) -> Dict[str, Any]:
    return {
        "id": descriptor.id,
        "key": descriptor.key,
        "label": descriptor.label,
        "type": descriptor.type,
        "input_type": descriptor.input_type,
        "required": descriptor.required,
        "options": list(descriptor.options),
        "order_index": descriptor.order_index,
    }


def normalize_field_entry(entry) -> Dict[str, Any]:
    return normalize_descriptor(describe(entry.payload, entry.order_index, entry.id))

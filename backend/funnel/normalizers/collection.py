from typing import Any, Dict, Iterable, List

from flask import current_app

from funnel.domain.ordering.collection import display_order


def normalize_entry(entry) -> Dict[str, Any]:
    data = {"id": entry.id, "order_index": entry.order_index}
    data.update(entry.payload or {})
    return data


def normalize_entries(entries: Iterable) -> List[Dict[str, Any]]:
    return [normalize_entry(entry) for entry in display_order(entries)]


def normalize_mutation(result, normalize_item, message: str) -> Dict[str, Any]:
    """
    Envelope for owner-side mutations. ``changed`` is False for no-ops such
    as moving the first item up; the dashboard uses it to skip the flash.
    """
    return {
        "changed": result.changed,
        "message": message if result.changed else None,
        "flash_ttl_ms": current_app.config["FLASH_MESSAGE_TTL_MS"],
        "item": normalize_item(result.subject) if result.subject is not None else None,
        "items": [normalize_item(entry) for entry in display_order(result.after)],
    }

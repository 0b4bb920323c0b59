"""
Owner-side operations shared by every ordered collection on a profile
(gallery items, reviews). Each call builds the collection from stored
rows, applies one mutation and raises ``PersistenceError`` if the store
failed; by then the collection has already rolled itself back.
"""
from dataclasses import dataclass
from typing import Any, Tuple

from funnel.models.gallery_item import GalleryItem
from funnel.models.review import Review
from funnel.domain.exceptions import PersistenceError
from funnel.domain.ordering.collection import MutationResult, OrderedCollection
from funnel.persistence.ordered_store import SqlOrderedStore
from funnel.utils.audit import log_action
from funnel.utils.transaction import transactional
from funnel.application.profiles.access import authorize_profile


@dataclass(frozen=True)
class CollectionKind:
    model: type
    entity_type: str
    columns: Tuple[str, ...]

    def row_payload(self, row) -> dict:
        return {column: getattr(row, column) for column in self.columns}

    def store(self) -> SqlOrderedStore:
        return SqlOrderedStore(self.model, self.row_payload)


GALLERY = CollectionKind(
    model=GalleryItem,
    entity_type="gallery_item",
    columns=("kind", "title", "image_url", "youtube_url", "mp4_url", "poster_url"),
)

REVIEWS = CollectionKind(
    model=Review,
    entity_type="review",
    columns=("type", "image_url", "source", "name", "rating", "event", "quote"),
)


def open_collection(*, session, kind: CollectionKind, profile_id: str) -> OrderedCollection:
    authorize_profile(session, profile_id)
    store = kind.store()
    return OrderedCollection(profile_id, store.load(profile_id), store)


def append_item(*, session, kind: CollectionKind, profile_id: str, payload: dict) -> MutationResult:
    collection = open_collection(session=session, kind=kind, profile_id=profile_id)
    result = collection.append(payload)
    return _finish(session, kind, profile_id, result)


def move_item(*, session, kind: CollectionKind, profile_id: str, item_id: str, direction: int) -> MutationResult:
    collection = open_collection(session=session, kind=kind, profile_id=profile_id)
    result = collection.move(item_id, direction)
    return _finish(session, kind, profile_id, result, payload={"direction": direction})


def remove_item(*, session, kind: CollectionKind, profile_id: str, item_id: str) -> MutationResult:
    collection = open_collection(session=session, kind=kind, profile_id=profile_id)
    result = collection.remove(item_id)
    return _finish(session, kind, profile_id, result)


def update_item(*, session, kind: CollectionKind, profile_id: str, item_id: str, changes: dict) -> MutationResult:
    collection = open_collection(session=session, kind=kind, profile_id=profile_id)
    entry = collection.find(item_id)
    if entry is None or not changes:
        return MutationResult("revise", collection.entries, collection.entries, changed=False, subject=entry)

    result = collection.revise(item_id, {**entry.payload, **changes})
    try:
        kind.store().update_fields(profile_id, item_id, changes)
    except PersistenceError as exc:
        result.rollback()
        result.error = str(exc)

    return _finish(session, kind, profile_id, result, payload={"fields": sorted(changes)})


def _finish(session, kind: CollectionKind, profile_id: str, result: MutationResult, payload: dict | None = None) -> MutationResult:
    if result.error:
        raise PersistenceError(result.error)

    if result.changed:
        with transactional():
            log_action(
                session=session,
                action=f"{kind.entity_type}.{result.action}",
                entity_type=kind.entity_type,
                entity_id=result.subject.id if result.subject else None,
                profile_id=profile_id,
                payload=payload,
            )

    return result

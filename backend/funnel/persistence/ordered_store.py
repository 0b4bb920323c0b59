from dataclasses import asdict, is_dataclass
from typing import Any, Callable, List

from sqlalchemy.exc import SQLAlchemyError

from funnel.domain.exceptions import PersistenceError
from funnel.extensions import db
from funnel.domain.ordering.collection import Entry
from funnel.utils.transaction import transactional


def payload_columns(payload: Any) -> dict:
    if payload is None:
        return {}
    if hasattr(payload, "as_columns"):
        return payload.as_columns()
    if is_dataclass(payload):
        return asdict(payload)
    return dict(payload)


class SqlOrderedStore:
    """
    Row-level persistence for one ordered table (form_fields,
    gallery_items, reviews).

    Every call is its own transaction. A move therefore lands as one
    UPDATE per row; rows are never upserted.
    """

    def __init__(self, model, to_payload: Callable[[Any], Any]):
        self.model = model
        self._to_payload = to_payload

    @property
    def table(self) -> str:
        return self.model.__tablename__

    def load(self, profile_id: str) -> List[Entry]:
        try:
            rows = (
                self.model.query
                .filter_by(profile_id=profile_id)
                .order_by(self.model.order_index.asc(), self.model.created_at.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not load {self.table}") from exc

        return [Entry(id=row.id, order_index=row.order_index, payload=self._to_payload(row)) for row in rows]

    def insert(self, owner_id: str, entry: Entry) -> None:
        row = self.model()
        row.id = entry.id
        row.profile_id = owner_id
        row.order_index = entry.order_index
        for column, value in payload_columns(entry.payload).items():
            setattr(row, column, value)

        self._write("insert", lambda: self._insert(row))

    def update_order_index(self, owner_id: str, item_id: str, order_index: int) -> None:
        self._write("update", lambda: self._update(owner_id, item_id, {"order_index": order_index}))

    def update_fields(self, owner_id: str, item_id: str, changes: dict) -> None:
        if not changes:
            return
        self._write("update", lambda: self._update(owner_id, item_id, changes))

    def delete(self, owner_id: str, item_id: str) -> None:
        # Deleting a row that is already gone is not an error
        self._write(
            "delete",
            lambda: self.model.query
            .filter_by(id=item_id, profile_id=owner_id)
            .delete(synchronize_session=False),
        )

    def _insert(self, row) -> None:
        db.session.add(row)
        db.session.flush()

    def _update(self, owner_id: str, item_id: str, changes: dict) -> None:
        count = (
            self.model.query
            .filter_by(id=item_id, profile_id=owner_id)
            .update(changes, synchronize_session=False)
        )
        if not count:
            raise PersistenceError(f"{self.table} row {item_id} no longer exists")

    def _write(self, verb: str, operation: Callable[[], Any]) -> None:
        try:
            with transactional():
                operation()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not {verb} {self.table} row") from exc

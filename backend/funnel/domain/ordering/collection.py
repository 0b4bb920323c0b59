"""
Ordered collections scoped to a single profile.

Items display by ascending ``order_index``. Appends land at ``max + 10``.
A move renumbers the whole visible sequence to 10, 20, 30, ... and writes
every row, one update per row; two adjacent indices are never swapped in
place, so rows that already share an index are pulled apart by the first
move.

Every mutation is applied to the local sequence first, then persisted.
When the store fails the local sequence is restored to the exact snapshot
taken before the mutation and the returned ``MutationResult`` carries the
error message.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol, Tuple

from funnel.domain.exceptions import PersistenceError
from funnel.domain.invariants.ordering import ORDER_STEP, assert_clean_sequence

logger = logging.getLogger(__name__)

MOVE_UP = -1
MOVE_DOWN = 1


@dataclass(frozen=True)
class Entry:
    id: str
    order_index: int
    payload: Any = None


class OrderedStore(Protocol):
    def insert(self, owner_id: str, entry: Entry) -> None: ...

    def update_order_index(self, owner_id: str, item_id: str, order_index: int) -> None: ...

    def delete(self, owner_id: str, item_id: str) -> None: ...


Snapshot = Tuple[Entry, ...]


@dataclass
class MutationResult:
    """
    Outcome of one mutation.

    ``before`` is the local sequence prior to the call and ``after`` the
    sequence the mutation attempted to reach. ``rollback()`` puts the
    owning collection back on ``before``.
    """
    action: str
    before: Snapshot
    after: Snapshot
    changed: bool = False
    subject: Optional[Entry] = None
    error: Optional[str] = None
    _restore: Optional[Callable[[Snapshot], None]] = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def rollback(self) -> None:
        if self._restore is not None:
            self._restore(self.before)


def display_order(entries: Iterable[Entry]) -> Snapshot:
    # sorted() is stable: ties keep their load order
    return tuple(sorted(entries, key=lambda entry: entry.order_index))


def next_order_index(entries: Iterable[Entry]) -> int:
    indices = [entry.order_index for entry in entries]
    return max(indices) + ORDER_STEP if indices else ORDER_STEP


def renumber(entries: Iterable[Entry]) -> Snapshot:
    return tuple(
        replace(entry, order_index=ORDER_STEP * position)
        for position, entry in enumerate(entries, start=1)
    )


class OrderedCollection:
    def __init__(self, owner_id: str, entries: Iterable[Entry], store: OrderedStore):
        self.owner_id = owner_id
        self._store = store
        self._entries: Snapshot = display_order(entries)

    @property
    def entries(self) -> Snapshot:
        return self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def find(self, item_id: str) -> Optional[Entry]:
        return next((entry for entry in self._entries if entry.id == item_id), None)

    def position(self, item_id: str) -> int:
        for position, entry in enumerate(self._entries):
            if entry.id == item_id:
                return position
        return -1

    # ------------------------
    # Mutations
    # ------------------------

    def append(self, payload: Any, item_id: Optional[str] = None) -> MutationResult:
        before = self._entries
        entry = Entry(
            id=item_id or str(uuid.uuid4()),
            order_index=next_order_index(before),
            payload=payload,
        )
        result = self._apply("append", before, before + (entry,), subject=entry)

        try:
            self._store.insert(self.owner_id, entry)
        except PersistenceError as exc:
            return self._fail(result, exc)

        return result

    def move(self, item_id: str, direction: int) -> MutationResult:
        before = self._entries
        index = self.position(item_id)
        target = index + direction

        if direction not in (MOVE_UP, MOVE_DOWN) or index < 0:
            return self._noop("move", before)
        if target < 0 or target >= len(before):
            return self._noop("move", before)

        reordered = list(before)
        picked = reordered.pop(index)
        reordered.insert(target, picked)

        after = renumber(reordered)
        assert_clean_sequence(after)

        result = self._apply("move", before, after, subject=after[target])

        written: list[str] = []
        try:
            for entry in after:
                self._store.update_order_index(self.owner_id, entry.id, entry.order_index)
                written.append(entry.id)
        except PersistenceError as exc:
            self._compensate(before, written)
            return self._fail(result, exc)

        return result

    def remove(self, item_id: str) -> MutationResult:
        before = self._entries
        entry = self.find(item_id)
        if entry is None:
            return self._noop("remove", before)

        # Gaps are fine; remaining indices are left as they are
        after = tuple(e for e in before if e.id != item_id)
        result = self._apply("remove", before, after, subject=entry)

        try:
            self._store.delete(self.owner_id, item_id)
        except PersistenceError as exc:
            return self._fail(result, exc)

        return result

    def revise(self, item_id: str, payload: Any) -> MutationResult:
        """
        Swap an entry's payload locally. Nothing is written; the caller
        persists the change and decides how to recover from a failure.
        """
        before = self._entries
        entry = self.find(item_id)
        if entry is None:
            return self._noop("revise", before)

        updated = replace(entry, payload=payload)
        after = tuple(updated if e.id == item_id else e for e in before)
        return self._apply("revise", before, after, subject=updated)

    # ------------------------
    # Internals
    # ------------------------

    def _restore(self, snapshot: Snapshot) -> None:
        self._entries = snapshot

    def _apply(self, action: str, before: Snapshot, after: Snapshot, *, subject: Entry) -> MutationResult:
        self._entries = after
        return MutationResult(
            action=action,
            before=before,
            after=after,
            changed=True,
            subject=subject,
            _restore=self._restore,
        )

    def _noop(self, action: str, before: Snapshot) -> MutationResult:
        return MutationResult(action=action, before=before, after=before, changed=False)

    def _fail(self, result: MutationResult, exc: PersistenceError) -> MutationResult:
        result.rollback()
        result.error = str(exc) or f"Failed to {result.action}"
        logger.warning(
            "%s on profile %s rolled back: %s",
            result.action,
            self.owner_id,
            result.error,
        )
        return result

    def _compensate(self, before: Snapshot, written: list[str]) -> None:
        """Best-effort write-back of the indices a failed move already changed."""
        original = {entry.id: entry.order_index for entry in before}

        for item_id in written:
            try:
                self._store.update_order_index(self.owner_id, item_id, original[item_id])
            except PersistenceError:
                logger.error(
                    "Could not restore order_index of %s on profile %s",
                    item_id,
                    self.owner_id,
                )

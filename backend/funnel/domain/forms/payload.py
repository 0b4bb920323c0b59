from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

RESERVED_KEYS = frozenset({"profile_slug"})
MAX_KEY_LENGTH = 100


class LeadPayload(Mapping[str, str]):
    """
    Submitted lead values keyed by field key.

    Keys are non-empty strings, values are always strings (anything else,
    such as an uploaded file, is stored as ""). Which keys matter is
    decided by the profile's form schema, not here.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: dict[str, str] = {}
        for key, value in (data or {}).items():
            self._set(key, value)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Any, Any]]) -> "LeadPayload":
        payload = cls()
        for key, value in pairs:
            payload._set(key, value)
        return payload

    def _set(self, key: Any, value: Any) -> None:
        if not isinstance(key, str):
            return
        key = key.strip()
        if not key or key in RESERVED_KEYS or len(key) > MAX_KEY_LENGTH:
            return
        self._data[key] = value if isinstance(value, str) else ""

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"LeadPayload({self._data!r})"

    def _contact(self, key: str) -> Optional[str]:
        return self._data.get(key, "").strip() or None

    @property
    def phone(self) -> Optional[str]:
        return self._contact("phone")

    @property
    def email(self) -> Optional[str]:
        return self._contact("email")

    def to_dict(self) -> dict[str, str]:
        return dict(self._data)

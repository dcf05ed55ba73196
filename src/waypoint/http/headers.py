"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]``. Stores name/value pairs in arrival
order, so repeated headers (e.g. ``Set-Cookie``) survive normalization.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header (e.g. multiple ``Set-Cookie``).
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: tuple[tuple[str, str], ...] = ()) -> None:
        object.__setattr__(self, "_pairs", pairs)

    @classmethod
    def coerce(
        cls, value: Headers | Mapping[str, str] | Iterable[tuple[str, str]] | None
    ) -> Headers:
        """Build ``Headers`` from a mapping, an iterable of pairs, or ``None``."""
        if value is None:
            return cls()
        if isinstance(value, Headers):
            return value
        items = value.items() if isinstance(value, Mapping) else value
        return cls(tuple((str(name), str(val)) for name, val in items))

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._pairs:
            if name.lower() == key_lower:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name.lower() == key_lower for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._pairs:
            key = name.lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self._lowered() == other._lowered()
        if isinstance(other, Mapping):
            return dict(self) == {str(k).lower(): v for k, v in other.items()}
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._lowered())

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def _lowered(self) -> tuple[tuple[str, str], ...]:
        return tuple((name.lower(), value) for name, value in self._pairs)

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (e.g. multiple ``Set-Cookie``)."""
        key_lower = key.lower()
        return [value for name, value in self._pairs if name.lower() == key_lower]

    def with_header(self, name: str, value: str) -> Headers:
        """Return new ``Headers`` with an additional pair appended."""
        return Headers((*self._pairs, (name, value)))

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        """Access the raw name/value pairs in arrival order."""
        return self._pairs

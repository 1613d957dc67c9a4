"""Ordered, case-insensitive header lists.

What:
  Provide :class:`Header` and the immutable :class:`HeaderList` used for
  free-form message headers and for the derived MIME header set.

Why:
  Header names compare case-insensitively, order matters on the wire, and some
  names (``Received``, ``X-*``) legitimately repeat. A plain ``dict`` loses the
  duplicates while naive list concatenation produces duplicate
  ``Content-Type`` lines. The list offers an explicit ``set`` that overwrites
  in place instead.

How:
  Store a tuple of :class:`Header` pairs. Every modifier returns a new list so
  values embedded in frozen dataclasses stay immutable.

Interfaces:
  :class:`Header`, :class:`HeaderList`.

Invariants & Safety:
  - ``set`` keeps the position of the first matching entry and drops later
    matches, so the key occurs exactly once afterwards.
  - Entries that are not overwritten keep their original name casing.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union


class Header(NamedTuple):
    """A single ``name: value`` header pair."""

    name: str
    value: str


HeaderInput = Union["HeaderList", Mapping[str, str], Iterable[Tuple[str, str]], None]


def _key(name: str) -> str:
    return name.strip().lower()


class HeaderList:
    """Immutable ordered sequence of headers with case-insensitive lookup."""

    __slots__ = ("_items",)

    def __init__(self, headers: HeaderInput = None) -> None:
        if headers is None:
            items: Tuple[Header, ...] = ()
        elif isinstance(headers, HeaderList):
            items = headers._items
        elif isinstance(headers, Mapping):
            items = tuple(Header(str(name), str(value)) for name, value in headers.items())
        else:
            items = tuple(Header(str(name), str(value)) for name, value in headers)
        self._items = items

    @classmethod
    def coerce(cls, headers: HeaderInput) -> "HeaderList":
        if isinstance(headers, HeaderList):
            return headers
        return cls(headers)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value stored under ``name``."""

        key = _key(name)
        for header in self._items:
            if _key(header.name) == key:
                return header.value
        return default

    def get_all(self, name: str) -> List[str]:
        key = _key(name)
        return [header.value for header in self._items if _key(header.name) == key]

    def set(self, name: str, value: str) -> "HeaderList":
        """Insert or overwrite ``name``.

        The first same-named entry is replaced in place (taking the new name
        casing); any further same-named entries are removed. When the name is
        absent the header is appended.
        """

        key = _key(name)
        result: List[Header] = []
        replaced = False
        for header in self._items:
            if _key(header.name) != key:
                result.append(header)
            elif not replaced:
                result.append(Header(name, value))
                replaced = True
        if not replaced:
            result.append(Header(name, value))
        return HeaderList(result)

    def append(self, name: str, value: str) -> "HeaderList":
        return HeaderList(self._items + (Header(name, value),))

    def without(self, name: str) -> "HeaderList":
        """Return a copy with every ``name`` entry removed."""

        key = _key(name)
        return HeaderList(header for header in self._items if _key(header.name) != key)

    def names(self) -> List[str]:
        return [header.name for header in self._items]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        key = _key(name)
        return any(_key(header.name) == key for header in self._items)

    def __iter__(self) -> Iterator[Header]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Header:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderList):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"HeaderList({list(self._items)!r})"

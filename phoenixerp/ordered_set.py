"""An insertion-ordered set."""

from __future__ import annotations

import json
from collections.abc import Hashable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


class OrderedSet(Generic[T]):
    """A set that remembers the order in which values were first added."""

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._items: dict[T, None] = dict.fromkeys(values)

    @classmethod
    def from_json(cls, src: str) -> OrderedSet[int]:
        """Build a set from a JSON array of integers; short input gives an empty set."""
        items: list[int] = []
        if len(src) > 2:
            parsed = json.loads(src)
            if parsed is not None:
                if not isinstance(parsed, list) or not all(
                    isinstance(item, int) and not isinstance(item, bool) for item in parsed
                ):
                    raise ValueError(f"expected a JSON array of integers, got {src!r}")
                items = parsed
        return cls(items)

    def append(self, value: T) -> None:
        """Add ``value`` at the end unless it is already present."""
        self._items.setdefault(value, None)

    def remove(self, value: T) -> None:
        """Remove ``value`` if present."""
        self._items.pop(value, None)

    def reset(self) -> None:
        """Remove every value."""
        self._items.clear()

    def values(self) -> list[T]:
        """The values in insertion order."""
        return list(self._items)

    def to_json(self) -> str:
        """The values as a compact JSON array."""
        return json.dumps(self.values(), separators=(",", ":"))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.values()!r})"
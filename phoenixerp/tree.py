"""Collect rows together with all of their ancestors."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


class RelationTree:
    """Rows linked by ``id`` and ``parent_id_``, expanded from a set of children."""

    def __init__(self, rows: Iterable[Mapping[str, str]], children: Iterable[str]) -> None:
        self._values: dict[str, Mapping[str, str]] = {}
        self._relation: dict[str, str] = {}
        for row in rows:
            row_id = row.get("id")
            if row_id is None:
                continue
            self._values[row_id] = row
            parent_id = row.get("parent_id_")
            if parent_id is not None:
                self._relation[row_id] = parent_id
        self._children = list(children)

    def build(self) -> list[Mapping[str, str] | None]:
        """Each child followed by its ancestors, without repeats.

        Ids that have no row (such as a dangling parent) yield ``None``.
        """
        ids: dict[str, None] = {}
        for child in self._children:
            ids.update(dict.fromkeys(self._ancestry(child)))
        return [self._values.get(row_id) for row_id in ids]

    def _ancestry(self, node_id: str) -> list[str]:
        chain: list[str] = []
        seen: set[str] = set()
        current = node_id
        while True:
            if current in seen:
                raise ValueError(f"cycle in parent relation at {current!r}")
            chain.append(current)
            seen.add(current)
            if current not in self._relation:
                return chain
            current = self._relation[current]
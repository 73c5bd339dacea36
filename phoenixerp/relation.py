"""Walk parent/child relations stored in a ``parent_id_`` column."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from phoenixerp.query import NoRowsError, select, select_row


def query_relation_children(tx: Any, table: str, ids: Sequence[Any]) -> list[Any]:
    """``ids`` followed by all of their descendants, one generation after another."""
    result: list[Any] = []
    level = list(ids)
    while level:
        result.extend(level)
        placeholders = ", ".join("?" * len(level))
        rows = select(
            tx, f"SELECT id FROM {table} WHERE parent_id_ IN ({placeholders}) ", *level
        )
        level = [row["id"] for row in rows if "id" in row]
    return result


def query_relation_parents(tx: Any, table: str, id_: str) -> list[str]:
    """``id_`` followed by its ancestors; empty if ``id_`` has no row."""
    chain: list[str] = []
    current = id_
    while True:
        try:
            (parent_id,) = select_row(
                tx, f"SELECT parent_id_ FROM {table} WHERE id = ? ", current
            )
        except NoRowsError:
            return chain
        chain.append(current)
        if parent_id is None:
            return chain
        current = str(parent_id)
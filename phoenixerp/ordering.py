"""Drag-and-drop reordering of rows sorted by ``order_`` ascending."""

from __future__ import annotations

from typing import Any

from phoenixerp.idgen import generate_order_id
from phoenixerp.query import select_row, update

ORDER_GAP = 2048
_HALF_GAP = 1024


def _scan_int(value: Any) -> int:
    if value is None:
        raise ValueError("converting NULL to an integer is unsupported")
    return int(value)


def _midpoint(a: int, b: int) -> int:
    total = a + b
    return total // 2 if total >= 0 else -((-total) // 2)


def _calculate(tx: Any, table: str, target: str) -> int:
    (target_order,) = select_row(tx, f"SELECT order_ FROM {table} WHERE id = ?", target)
    target_order = _scan_int(target_order)

    (previous,) = select_row(
        tx,
        f"SELECT CASE WHEN MAX(order_) IS NULL THEN ? ELSE MAX(order_) END FROM {table} WHERE order_ < ? ",
        target_order - ORDER_GAP,
        target_order,
    )
    previous = _scan_int(previous)

    ordered = _midpoint(target_order, previous)
    if previous < ordered < target_order:
        return ordered

    update(tx, f"UPDATE {table} SET order_ = order_ - {ORDER_GAP} WHERE order_ <= ?", previous)
    return target_order + _HALF_GAP


def move_order(
    tx: Any,
    table: str,
    source: str,
    target: str,
    target_index: str,
    target_parent: str,
) -> None:
    """Move row ``source`` in front of row ``target``.

    With no ``target`` the row goes to the end: of the table, of the root
    level when ``target_parent`` is ``"0"``, or of ``target_parent``'s
    children. ``target_index`` is accepted for the client's move protocol.
    """
    if source == target or not source:
        return

    if not target:
        if not target_parent:
            update(tx, f"UPDATE {table} SET order_ = ?  WHERE id = ?", generate_order_id(), source)
        elif target_parent == "0":
            update(
                tx,
                f"UPDATE {table} SET order_ = ?, parent_id_ = NULL  WHERE id = ?",
                generate_order_id(),
                source,
            )
        else:
            (last,) = select_row(
                tx, f"SELECT MAX(order_) FROM {table} WHERE parent_id_ = ?", target_parent
            )
            update(
                tx,
                f"UPDATE {table} SET order_ = ?  WHERE id = ?",
                _scan_int(last) + ORDER_GAP,
                source,
            )
        return

    ordered = _calculate(tx, table, target)

    if not target_parent:
        update(tx, f"UPDATE {table} SET order_ = ? WHERE id = ?", ordered, source)
    elif target_parent == "0":
        update(tx, f"UPDATE {table} SET order_ = ?, parent_id_ = NULL WHERE id = ?", ordered, source)
    else:
        update(
            tx,
            f"UPDATE {table} SET order_ = ?, parent_id_ = ? WHERE id = ?",
            ordered,
            target_parent,
            source,
        )
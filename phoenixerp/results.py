"""Reshape query results (lists of string rows) into lookup structures."""

from __future__ import annotations

import json
import re
from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import TypeVar

T = TypeVar("T", bound=Hashable)

Row = Mapping[str, str]

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def _field(row: Row, name: str, role: str) -> str:
    try:
        return row[name]
    except KeyError:
        raise KeyError(f"row has no {role} field {name!r}") from None


def res_as_map(res: Iterable[Row], sensitive: bool, k: str, v: str) -> dict[str, str]:
    """Map column ``k`` to column ``v``; lower-cases both unless ``sensitive``."""
    result, _ = res_as_map_slice(res, sensitive, k, v)
    return result


def res_as_map_string_int(res: Iterable[Row], k: str, v: str) -> dict[str, int]:
    """Map column ``k`` to the integer value of column ``v``."""
    return {_field(row, k, "key"): _atoi(row.get(v, "")) for row in res}


def res_as_map_slice(
    res: Iterable[Row], sensitive: bool, k: str, v: str
) -> tuple[dict[str, str], list[str]]:
    """Like :func:`res_as_map`, also returning the keys in row order."""
    mapping: dict[str, str] = {}
    keys: list[str] = []
    for row in res:
        key = _field(row, k, "key")
        value = _field(row, v, "value")
        if not sensitive:
            key, value = key.lower(), value.lower()
        mapping[key] = value
        keys.append(key)
    return mapping, keys


def res_as_map2(res: Iterable[Row], k: str) -> dict[str, Row]:
    """Index whole rows by column ``k``."""
    return {_field(row, k, "key"): row for row in res}


def res_as_slice_string(res: Iterable[Row], k: str) -> list[str]:
    """Collect column ``k`` from every row."""
    return [_field(row, k, "key") for row in res]


def res_as_map_int(res: Iterable[Row], k: str, v: str) -> dict[int, str]:
    """Map the integer value of column ``k`` to column ``v``."""
    return {_atoi(_field(row, k, "key")): row.get(v, "") for row in res}


def slice_as_set(values: Iterable[T]) -> list[T]:
    """Drop duplicates, keeping the first occurrence of each value."""
    return list(dict.fromkeys(values))


def _parse_int_list(src: str) -> list[int]:
    parsed = json.loads(src)
    if parsed is None:
        return []
    if not isinstance(parsed, list) or not all(
        isinstance(item, int) and not isinstance(item, bool) for item in parsed
    ):
        raise ValueError(f"expected a JSON array of integers, got {src!r}")
    return parsed


def string_slice_int(olds: str, values: Sequence[int]) -> str:
    """Append ``values`` to the JSON integer array ``olds`` without duplicates."""
    old_values = _parse_int_list(olds) if len(olds) > 2 else []
    return json.dumps(slice_as_set([*old_values, *values]), separators=(",", ":"))
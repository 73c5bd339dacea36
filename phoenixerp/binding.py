"""Fill dataclasses from string rows using field metadata."""

import dataclasses
import inspect
import logging
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NAME_KEY = "name"
_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_INTEGER = re.compile(r"[+-]?[0-9]+")
_SKIP = object()

_KNOWN_TYPES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "datetime": datetime,
    "datetime.datetime": datetime,
}


def _parse_int(src: str) -> int:
    if not _INTEGER.fullmatch(src):
        raise ValueError(f"invalid integer {src!r}")
    return int(src)


def _parse_float(src: str) -> float:
    if src != src.strip() or "_" in src:
        raise ValueError(f"invalid number {src!r}")
    return float(src)


def _resolve(hint: Any, cls: type) -> Any:
    """Turn a string annotation into the type it names, where possible."""
    if not isinstance(hint, str):
        return hint
    name = hint.strip()
    if name in _KNOWN_TYPES:
        return _KNOWN_TYPES[name]
    module = inspect.getmodule(cls)
    if module is not None:
        found = getattr(module, name, None)
        if found is not None:
            return found
    return hint


def _convert(src: str, hint: Any, field_name: str) -> Any:
    if hint is str:
        return src
    if hint is bool:
        raise TypeError(f"unsupported field type bool for {field_name!r}")
    if hint is int:
        return _parse_int(src)
    if hint is float:
        return _parse_float(src)
    if hint is datetime:
        return datetime.strptime(src, _DATETIME_FORMAT)
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        logger.error("Undefined field type %s for %r", hint.__name__, field_name)
        return _SKIP
    raise TypeError(f"unsupported field type {hint!r} for {field_name!r}")


def from_row(cls: type[T], source: Mapping[str, str]) -> T:
    """Build ``cls`` from ``source``.

    Only fields whose metadata carries a ``"name"`` are filled, from that key
    of ``source`` (missing keys read as ``""``); other fields keep their
    defaults. Supported field types are str, int, float and datetime.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass")

    kwargs: dict[str, Any] = {}
    for fld in dataclasses.fields(cls):
        column = fld.metadata.get(_NAME_KEY)
        if column is None or not fld.init:
            continue
        value = _convert(source.get(column, ""), _resolve(fld.type, cls), fld.name)
        if value is not _SKIP:
            kwargs[fld.name] = value
    return cls(**kwargs)
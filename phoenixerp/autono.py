"""Generate document numbers from configured number rules."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from phoenixerp.idgen import generate_id, get_now
from phoenixerp.query import NoRowsError, insert, select, select_row, update

_INTEGER = re.compile(r"[+-]?[0-9]+")

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_LAYOUT_TOKENS = re.compile(
    r"January|Jan|Monday|Mon|2006|_2|01|02|03|04|05|06|15|PM|pm|1|2|3|4|5"
)


class AutoNoError(ValueError):
    """A number rule could not produce the requested numbers."""


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def _hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


def _layout_token(token: str, moment: datetime) -> str:
    values = {
        "January": _MONTHS[moment.month - 1],
        "Jan": _MONTHS[moment.month - 1][:3],
        "Monday": _WEEKDAYS[moment.weekday()],
        "Mon": _WEEKDAYS[moment.weekday()][:3],
        "2006": f"{moment.year:04d}",
        "06": f"{moment.year % 100:02d}",
        "01": f"{moment.month:02d}",
        "1": str(moment.month),
        "02": f"{moment.day:02d}",
        "_2": f"{moment.day:2d}",
        "2": str(moment.day),
        "15": f"{moment.hour:02d}",
        "03": f"{_hour12(moment):02d}",
        "3": str(_hour12(moment)),
        "04": f"{moment.minute:02d}",
        "4": str(moment.minute),
        "05": f"{moment.second:02d}",
        "5": str(moment.second),
        "PM": "PM" if moment.hour >= 12 else "AM",
        "pm": "pm" if moment.hour >= 12 else "am",
    }
    return values[token]


def format_layout(moment: datetime, layout: str) -> str:
    """Format ``moment`` with a reference-time layout such as ``20060102``."""
    return _LAYOUT_TOKENS.sub(lambda match: _layout_token(match.group(0), moment), layout)


def _sequence(
    tx: Any, kind_id: str, prefix: str, start_text: str, num: int
) -> list[str]:
    width = len(start_text)
    try:
        (current,) = select_row(
            tx, "SELECT value_ FROM sys_auto_no WHERE kind_id_ = ? AND prefix_ = ?", kind_id, prefix
        )
    except NoRowsError:
        index = _atoi(start_text)
        insert(
            tx,
            "INSERT INTO sys_auto_no(id, kind_id_, prefix_, value_, create_at_) VALUES (?,?,?,?,?)",
            generate_id(),
            kind_id,
            prefix,
            index + num,
            get_now(),
        )
        numbers = range(index, index + num)
    else:
        index = _atoi(str(current))
        update(
            tx,
            "UPDATE sys_auto_no SET value_ = ?, update_at_ = ? WHERE kind_id_ = ? AND prefix_ = ?",
            index + num,
            get_now(),
            kind_id,
            prefix,
        )
        numbers = range(index + 1, index + num + 1)
    return [f"{prefix}{number:0{width}d}" for number in numbers]


def auto_no(
    tx: Any, kind_code: str, num: int, values: Mapping[str, str]
) -> list[str]:
    """Generate ``num`` numbers for the rule ``kind_code``.

    Rule items are applied in order: ``STRING`` appends literal text,
    ``VALUES`` appends ``values[item]``, ``DATETIME`` appends the current
    time in the item's layout and ``SEQ`` starts a zero-padded sequence.
    """
    query = """
			SELECT sys_auto_no_item.kind_id_, sys_auto_no_item.code_, sys_auto_no_item.value_
			FROM sys_auto_no_item 
				LEFT JOIN sys_auto_no_kind ON sys_auto_no_item.kind_id_ = sys_auto_no_kind.id
			WHERE sys_auto_no_kind.code_ = ?
			ORDER BY sys_auto_no_item.order_ ASC
		"""
    items = select(tx, query, kind_code)

    numbers: list[str] = []
    prefix_parts: list[str] = []

    def append(text: str) -> None:
        if numbers:
            numbers[:] = [number + text for number in numbers]
        else:
            prefix_parts.append(text)

    for item in items:
        kind_id = item.get("kind_id_", "")
        code = item.get("code_", "")
        value = item.get("value_", "")

        if code == "STRING":
            append(value)
        elif code == "VALUES":
            if value not in values:
                raise AutoNoError(f"missing variable parameter {value}")
            append(values[value])
        elif code == "DATETIME":
            append(format_layout(datetime.now(), value))
        elif code == "SEQ":
            numbers.extend(_sequence(tx, kind_id, "".join(prefix_parts), value, num))

    if len(numbers) != num:
        raise AutoNoError(f"generated {len(numbers)} numbers but expected {num}")
    return numbers
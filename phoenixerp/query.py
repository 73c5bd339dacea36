"""Thin query helpers over a DB-API connection that uses ``?`` placeholders."""

from __future__ import annotations

import logging
import re
from contextlib import closing
from datetime import date, datetime
from typing import Any

from phoenixerp.idgen import format_args

logger = logging.getLogger(__name__)

_HIDDEN_COLUMN = "order_"
_UTC_TIMESTAMP = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", re.ASCII)


class NoRowsError(LookupError):
    """A single-row query returned no rows."""


def _pretty(query: str) -> str:
    prefix = "\n\t\t"
    for depth in range(5, 1, -1):
        prefix = "\n" + "\t" * depth
        if query.startswith(prefix):
            break
    return query.replace(prefix, "\n\t").rstrip()


def _log(query: str, args: tuple[Any, ...]) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s %s", format_args(*args), _pretty(query))


def _format_datetime(moment: datetime) -> str:
    if moment.hour + moment.minute + moment.second == 0:
        return moment.strftime("%Y-%m-%d")
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def _normalise_text(text: str) -> str:
    if len(text) == 20 and _UTC_TIMESTAMP.fullmatch(text):
        try:
            return _format_datetime(datetime.strptime(text, "%Y-%m-%dT%H:%M:%SZ"))
        except ValueError:
            return text
    return text


def _to_text(value: Any) -> str:
    if isinstance(value, datetime):
        return _format_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        text = bytes(value).decode("utf-8", errors="replace")
    elif isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float):
        text = str(int(value)) if value.is_integer() and abs(value) < 1e21 else repr(value)
    else:
        text = str(value)
    return _normalise_text(text)


def select(tx: Any, query: str, *args: Any) -> list[dict[str, str]]:
    """Run ``query`` and return rows as lower-cased column -> text.

    NULL values and the ``order_`` column are left out of each row.
    """
    _log(query, args)
    with closing(tx.cursor()) as cursor:
        cursor.execute(query, args)
        columns = [description[0] for description in cursor.description or ()]
        rows = cursor.fetchall()
    return [
        {
            column.lower(): _to_text(value)
            for column, value in zip(columns, row)
            if column != _HIDDEN_COLUMN and value is not None
        }
        for row in rows
    ]


def select_row(tx: Any, query: str, *args: Any) -> tuple[Any, ...]:
    """Run ``query`` and return its first row as raw values; raise :class:`NoRowsError` if empty."""
    _log(query, args)
    with closing(tx.cursor()) as cursor:
        cursor.execute(query, args)
        row = cursor.fetchone()
    if row is None:
        raise NoRowsError("no rows in result set")
    return tuple(row)


def select_columns(tx: Any, query: str, *args: Any) -> list[str]:
    """Run ``query`` and return the names of its result columns."""
    _log(query, args)
    with closing(tx.cursor()) as cursor:
        cursor.execute(query, args)
        return [description[0] for description in cursor.description or ()]


def execute(tx: Any, query: str, *args: Any) -> int:
    """Run a statement and return the number of affected rows."""
    _log(query, args)
    with closing(tx.cursor()) as cursor:
        cursor.execute(query, args)
        return cursor.rowcount


def insert(tx: Any, query: str, *args: Any) -> None:
    """Run an INSERT statement."""
    _log(query, args)
    with closing(tx.cursor()) as cursor:
        cursor.execute(query, args)


def update(tx: Any, query: str, *args: Any) -> None:
    """Run an UPDATE statement."""
    _log(query, args)
    with closing(tx.cursor()) as cursor:
        cursor.execute(query, args)


def delete(tx: Any, query: str, *args: Any) -> None:
    """Run a DELETE statement."""
    _log(query, args)
    with closing(tx.cursor()) as cursor:
        cursor.execute(query, args)
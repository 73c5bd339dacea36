"""Identifier, ordering key and timestamp helpers."""

from __future__ import annotations

import base64
import json
import sys
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

ID_ALPHABET = "123456789abcdfghjkmnopqrstuvwxyz"
_ID_PADDING = "0"
_STANDARD_BASE32 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567="
_TO_ID_ALPHABET = str.maketrans(_STANDARD_BASE32, ID_ALPHABET + _ID_PADDING)

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def generate_id() -> str:
    """A 32 character id: a big-endian seconds prefix and a random UUID, base32 encoded."""
    prefix = (int(time.time()) & 0xFFFFFFFF).to_bytes(4, "big")
    raw = prefix + uuid.uuid4().bytes
    return base64.b32encode(raw).decode("ascii").translate(_TO_ID_ALPHABET)


def generate_order_id() -> int:
    """An ordering key: the current time in nanoseconds."""
    return time.time_ns()


def get_now() -> str:
    """The local time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now().strftime(DATETIME_FORMAT)


def _render(arg: Any) -> str:
    if isinstance(arg, str):
        return json.dumps(arg, ensure_ascii=False)
    if isinstance(arg, bool):
        return "true" if arg else "false"
    if isinstance(arg, int):
        return str(arg)
    if isinstance(arg, float):
        return f"{arg:f}"
    return f"<{type(arg).__name__}>{arg!r}"


def _caller_location() -> str:
    try:
        frame = sys._getframe(3)
    except ValueError:
        return "?:0"
    return f"{Path(frame.f_code.co_filename).name}:{frame.f_lineno}"


def format_args(*args: Any) -> str:
    """Describe where a query was issued from and its arguments, for debug logs."""
    text = f"{_caller_location()} "
    if args:
        text += "[" + ", ".join(_render(arg) for arg in args) + "]"
    return text
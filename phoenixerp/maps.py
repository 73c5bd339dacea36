"""Comparison and formatting helpers for string-to-string mappings."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence


def compare_map(
    latest: Mapping[str, str], present: Mapping[str, str]
) -> tuple[dict[str, str], dict[str, str], dict[str, str]]:
    """Return ``(added, changed, removed)`` going from ``latest`` to ``present``."""
    added = {key: value for key, value in present.items() if key not in latest}
    changed = {
        key: value
        for key, value in present.items()
        if key in latest and latest[key] != value
    }
    removed = {key: value for key, value in latest.items() if key not in present}
    return added, changed, removed


def get_url_values(values: Mapping[str, Sequence[str]]) -> dict[str, str]:
    """Flatten multi-valued form data, keeping the last value of each key."""
    return {key: items[-1] for key, items in values.items() if len(items) > 0}


def compare_map_changed(
    latest: Mapping[str, str], present: Mapping[str, str]
) -> dict[str, str]:
    """Entries of ``present`` missing from ``latest`` or differing ignoring case."""
    return {
        key: value
        for key, value in present.items()
        if key not in latest or value.casefold() != latest[key].casefold()
    }


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def format_map(mapping: Mapping[str, str]) -> str:
    """Render a mapping as ``{"k": "v", ...}`` for log output."""
    if not mapping:
        return "{}"
    body = ", ".join(f"{_quote(key)}: {_quote(value)}" for key, value in mapping.items())
    return "{" + body + "}"
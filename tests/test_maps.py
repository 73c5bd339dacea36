from urllib.parse import parse_qs

from phoenixerp.maps import compare_map, compare_map_changed, format_map, get_url_values


def test_compare_map_splits_differences():
    latest = {"a": "int", "b": "varchar(32)", "c": "text"}
    present = {"a": "int", "b": "varchar(64)", "d": "date"}
    added, changed, removed = compare_map(latest, present)
    assert added == {"d": "date"}
    assert changed == {"b": "varchar(64)"}
    assert removed == {"c": "text"}


def test_compare_map_identical_is_empty():
    same = {"x": "1"}
    assert compare_map(same, dict(same)) == ({}, {}, {})


def test_get_url_values_takes_last():
    values = parse_qs("a=1&a=2&b=x")
    assert get_url_values(values) == {"a": "2", "b": "x"}


def test_get_url_values_skips_empty_lists():
    assert get_url_values({"a": [], "b": ["y"]}) == {"b": "y"}
    assert get_url_values({}) == {}


def test_compare_map_changed_ignores_case():
    latest = {"name": "Alice", "city": "Paris"}
    present = {"name": "ALICE", "city": "Rome", "zip": "75"}
    assert compare_map_changed(latest, present) == {"city": "Rome", "zip": "75"}


def test_format_map_empty():
    assert format_map({}) == "{}"


def test_format_map_single_pair():
    assert format_map({"method": "Sync"}) == '{"method": "Sync"}'


def test_format_map_quotes_every_entry():
    text = format_map({"a": "1", "b": 'say "hi"'})
    assert text.startswith("{") and text.endswith("}")
    assert '"a": "1"' in text
    assert '"b": "say \\"hi\\""' in text
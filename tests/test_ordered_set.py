import json

import pytest

from phoenixerp.ordered_set import OrderedSet


def test_init_drops_duplicates_in_order():
    assert OrderedSet(["b", "a", "b"]).values() == ["b", "a"]


def test_append_ignores_existing():
    s = OrderedSet([1, 2])
    s.append(2)
    s.append(3)
    assert s.values() == [1, 2, 3]
    assert len(s) == 3


def test_remove_present_and_absent():
    s = OrderedSet(["x", "y", "z"])
    s.remove("y")
    s.remove("missing")
    assert s.values() == ["x", "z"]
    assert "y" not in s


def test_reset_empties():
    s = OrderedSet([1, 2, 3])
    s.reset()
    assert s.values() == []
    assert len(s) == 0


def test_iteration_and_membership():
    s = OrderedSet(["a", "b"])
    assert list(s) == ["a", "b"]
    assert "a" in s


def test_json_round_trip():
    s = OrderedSet.from_json("[4,1,4,2]")
    assert s.values() == [4, 1, 2]
    assert json.loads(s.to_json()) == [4, 1, 2]
    assert OrderedSet.from_json(s.to_json()).values() == s.values()


def test_from_json_short_input_is_empty():
    assert OrderedSet.from_json("").values() == []
    assert OrderedSet.from_json("[]").to_json() == "[]"


def test_from_json_rejects_non_integers():
    with pytest.raises(ValueError):
        OrderedSet.from_json('["a"]')


def test_from_json_rejects_bad_json():
    with pytest.raises(ValueError):
        OrderedSet.from_json("[1,2")
import base64
import re
import time
from datetime import datetime

from phoenixerp.idgen import (
    ID_ALPHABET,
    format_args,
    generate_id,
    generate_order_id,
    get_now,
)

_BACK = str.maketrans(ID_ALPHABET + "0", "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567=")


def _decode(identifier):
    return base64.b32decode(identifier.translate(_BACK))


def test_generate_id_shape():
    identifier = generate_id()
    assert len(identifier) == 32
    assert set(identifier) <= set(ID_ALPHABET)


def test_generate_id_prefix_is_current_time():
    before = int(time.time())
    raw = _decode(generate_id())
    after = int(time.time())
    assert len(raw) == 20
    assert before <= int.from_bytes(raw[:4], "big") <= after


def test_generate_id_unique():
    ids = {generate_id() for _ in range(200)}
    assert len(ids) == 200


def test_generate_order_id_monotonic_and_near_now():
    first = generate_order_id()
    second = generate_order_id()
    assert second >= first
    assert abs(first - time.time_ns()) < 5_000_000_000


def test_get_now_format():
    now = get_now()
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", now)
    parsed = datetime.strptime(now, "%Y-%m-%d %H:%M:%S")
    assert abs((datetime.now() - parsed).total_seconds()) < 5


def test_format_args_renders_values():
    text = format_args("a", 1, True, 1.5)
    assert text.endswith(' ["a", 1, true, 1.500000]')


def test_format_args_without_arguments_has_no_brackets():
    text = format_args()
    assert text.endswith(" ")
    assert "[" not in text


def test_format_args_other_types():
    text = format_args(None)
    assert text.endswith("[<NoneType>None]")
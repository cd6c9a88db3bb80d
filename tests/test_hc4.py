import pytest
from hypothesis import given, settings, strategies as st

from lzwindow.coder import MATCH_LEN_MAX, MATCH_LEN_MIN
from lzwindow.hash234 import hash234_mem_usage
from lzwindow.hc4 import HC4, MAX_POS, hc4_mem_usage
from lzwindow.lz_encoder import LZEncoder


def make_encoder(data, dict_size=4096, nice_len=32, depth_limit=0):
    finder = HC4(dict_size, nice_len, depth_limit)
    enc = LZEncoder(dict_size, 1, MATCH_LEN_MAX - 1, nice_len, MATCH_LEN_MAX, finder)
    enc.fill_window(data)
    enc.set_finishing()
    return finder, enc


def collect(enc, count):
    found = []
    for _ in range(count):
        matches = enc.find_matches()
        assert enc.verify_matches(matches)
        found.append(list(matches))
    return found


def test_default_depth_limit_derived_from_nice_len():
    assert HC4(4096, 64, 0).depth_limit == 20


def test_explicit_depth_limit_kept():
    assert HC4(4096, 64, 7).depth_limit == 7


def test_first_position_has_no_match():
    _, enc = make_encoder(b"abcabcabcabc")
    found = collect(enc, 1)
    assert found[0] == []


def test_periodic_data_longest_match():
    data = b"abcabcabcabc"
    _, enc = make_encoder(data)
    found = collect(enc, len(data) - 3)
    assert found[1] == []
    assert found[2] == []
    assert found[3][-1] == (len(data) - 3, 2)


def test_run_of_zeros_matches_at_distance_zero():
    data = bytes(100)
    _, enc = make_encoder(data)
    found = collect(enc, 2)
    assert found[1][-1] == (len(data) - 1, 0)


def test_matches_returns_last_result():
    finder, enc = make_encoder(b"abcabcabcabc")
    result = enc.find_matches()
    assert finder.matches() is result
    assert enc.matches() is result


def test_skip_then_find():
    data = b"abcabcabcabc"
    _, enc = make_encoder(data)
    enc.skip(3)
    assert enc.get_pos() == 2
    matches = enc.find_matches()
    assert enc.get_pos() == 3
    assert enc.verify_matches(matches)
    assert list(matches)[-1] == (len(data) - 3, 2)


def test_normalization_keeps_distances():
    data = b"abcabcabcabcabcabcabcabcabcabc"
    finder, enc = make_encoder(data)
    finder.lz_pos = MAX_POS - 2
    count = len(data) - 3
    found = collect(enc, count)
    assert finder.lz_pos == finder.cyclic_size + count - 2
    assert found[3][-1] == (len(data) - 3, 2)


def test_mem_usage_grows_with_dictionary():
    small = hc4_mem_usage(1 << 16)
    large = hc4_mem_usage(1 << 24)
    assert large > small
    assert small > hash234_mem_usage(1 << 16)


@settings(max_examples=25, deadline=None)
@given(st.lists(st.integers(0, 2), min_size=4, max_size=200).map(bytes))
def test_matches_are_valid(data):
    dict_size = 4096
    _, enc = make_encoder(data, dict_size=dict_size, nice_len=16)
    for position in range(len(data) - 3):
        matches = enc.find_matches()
        assert enc.get_pos() == position
        assert enc.verify_matches(matches)
        pairs = list(matches)
        lengths = [length for length, _ in pairs]
        assert lengths == sorted(set(lengths))
        for length, dist in pairs:
            assert MATCH_LEN_MIN <= length <= len(data) - position
            assert 0 <= dist < min(position, dict_size)


def test_get_avail_before_start_raises():
    finder = HC4(4096, 32, 0)
    enc = LZEncoder(4096, 1, MATCH_LEN_MAX - 1, 32, MATCH_LEN_MAX, finder)
    with pytest.raises(RuntimeError):
        enc.get_avail()
import io

import pytest
from hypothesis import given, strategies as st

from lzwindow.lz_encoder import LZEncoder, Matches, get_buf_size, normalize


class _BruteForceFinder:
    def __init__(self):
        self._matches = Matches(64)

    def find_matches(self, encoder):
        m = self._matches
        m.count = 0
        avail = encoder.move_pos(encoder.nice_len, 0)
        if avail == 0:
            return m
        limit = min(avail, encoder.match_len_max)
        best = 0
        for dist in range(encoder.get_pos()):
            length = encoder.get_match_len(dist, limit)
            if length >= 2 and length > best:
                m.lens[m.count] = length
                m.dists[m.count] = dist
                m.count += 1
                best = length
        return m

    def matches(self):
        return self._matches

    def skip(self, encoder, length):
        for _ in range(length):
            encoder.move_pos(encoder.nice_len, 0)


def _encoder(dict_size=4096):
    return LZEncoder(dict_size, 0, 0, 8, 16, _BruteForceFinder())


def test_buf_size_includes_margins():
    base = get_buf_size(4096, 0, 0, 273)
    assert get_buf_size(4096, 100, 50, 273) - base == 150


def test_buf_size_reserve_is_capped():
    assert get_buf_size(1 << 31, 0, 0, 0) == (1 << 31) + (512 << 20)


def test_normalize_example():
    positions = [0, 5, 10, 20]
    normalize(positions, 10)
    assert positions == [0, 0, 0, 10]


@given(st.lists(st.integers(min_value=0, max_value=1 << 30)), st.integers(min_value=0, max_value=1 << 30))
def test_normalize_invariants(positions, offset):
    result = list(positions)
    normalize(result, offset)
    assert len(result) == len(positions)
    for before, after in zip(positions, result):
        assert after >= 0
        if before > offset:
            assert after + offset == before
        else:
            assert after == 0


def test_new_encoder_not_started():
    enc = _encoder()
    assert not enc.is_started()
    with pytest.raises(RuntimeError):
        enc.get_avail()


def test_fill_window_limited_by_buffer():
    enc = _encoder()
    data = bytes(enc.buf_size + 10)
    assert enc.fill_window(data) == enc.buf_size


def test_find_matches_on_periodic_data():
    data = b"abcd" * 25
    enc = _encoder()
    assert enc.fill_window(data) == len(data)
    enc.set_finishing()
    assert enc.has_enough_data(0)
    for _ in range(5):
        matches = enc.find_matches()
    assert enc.get_current_byte() == data[enc.get_pos()]
    assert matches.count > 0
    assert matches.lens[matches.count - 1] == enc.match_len_max
    assert matches.dists[matches.count - 1] == 3
    assert enc.verify_matches(matches)
    assert enc.matches() is matches


def test_verify_matches_detects_wrong_length():
    data = b"xyz" * 20
    enc = _encoder()
    enc.fill_window(data)
    enc.set_finishing()
    for _ in range(4):
        matches = enc.find_matches()
    assert matches.count > 0
    matches.lens[0] += 1
    assert not enc.verify_matches(matches)


def test_copy_uncompressed():
    data = bytes(range(50))
    enc = _encoder()
    enc.fill_window(data)
    enc.set_finishing()
    enc.skip(20)
    out = io.BytesIO()
    enc.copy_uncompressed(out, 10, 10)
    assert out.getvalue() == data[10:20]


def test_pending_bytes_are_reprocessed():
    enc = _encoder()
    enc.fill_window(b"12345")
    assert not enc.has_enough_data(0)
    enc.skip(3)
    assert enc.pending_size == 3
    enc.fill_window(bytes(100))
    assert enc.pending_size == 0
    assert enc.get_pos() == 2


def test_set_preset_dict_keeps_tail():
    enc = _encoder()
    enc.set_preset_dict(4, b"0123456789")
    assert bytes(enc.buf[:4]) == b"6789"
    assert enc.write_pos == 4
    assert enc.is_started()
    with pytest.raises(RuntimeError):
        enc.set_preset_dict(4, b"abcd")


def test_fill_after_finishing_raises():
    enc = _encoder()
    enc.fill_window(b"abc")
    enc.set_finishing()
    with pytest.raises(RuntimeError):
        enc.fill_window(b"more")


def test_flushing_makes_tail_readable():
    enc = _encoder()
    enc.fill_window(b"abcdefgh")
    assert not enc.has_enough_data(0)
    enc.set_flushing()
    assert enc.has_enough_data(0)
    assert not enc.finishing


def test_move_pos_rejects_bad_requirements():
    enc = _encoder()
    with pytest.raises(ValueError):
        enc.move_pos(1, 2)


def test_window_moves_when_full():
    enc = _encoder()
    total = enc.buf_size + 10000
    stream = bytes(i % 251 for i in range(total))
    accepted = enc.fill_window(stream)
    assert accepted == enc.buf_size
    enc.skip(enc.read_limit + 1)
    absolute = enc.get_pos()
    assert enc.get_current_byte() == stream[absolute]
    more = enc.fill_window(stream[accepted:])
    assert more > 0
    assert enc.get_pos() < absolute
    shift = absolute - enc.get_pos()
    assert shift % 16 == 0
    assert enc.get_current_byte() == stream[absolute]
    assert enc.get_byte(5, 0) == stream[absolute + 5]
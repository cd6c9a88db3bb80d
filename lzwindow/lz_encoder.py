"""Sliding window and match bookkeeping used while encoding."""

from __future__ import annotations

from typing import BinaryIO, MutableSequence, Protocol


class Matches:
    """Lengths and distances of the matches found at one position."""

    def __init__(self, count_max: int) -> None:
        self.lens = [0] * count_max
        self.dists = [0] * count_max
        self.count = 0

    def __iter__(self):
        return zip(self.lens[: self.count], self.dists[: self.count])


class MatchFinder(Protocol):
    def find_matches(self, encoder: "LZEncoder") -> Matches: ...

    def matches(self) -> Matches: ...

    def skip(self, encoder: "LZEncoder", length: int) -> None: ...


def normalize(positions: MutableSequence[int], offset: int) -> None:
    """Subtract ``offset`` from every position in place, clamping at zero."""
    positions[:] = [p - offset if p > offset else 0 for p in positions]


def get_buf_size(
    dict_size: int, extra_size_before: int, extra_size_after: int, match_len_max: int
) -> int:
    """Return the window buffer size for the given dictionary and margins."""
    keep_size_before = extra_size_before + dict_size
    keep_size_after = extra_size_after + match_len_max
    reserve_size = min(dict_size // 2 + (256 << 10), 512 << 20)
    return keep_size_before + keep_size_after + reserve_size


class LZEncoder:
    """Input window that a match finder walks over while encoding."""

    def __init__(
        self,
        dict_size: int,
        extra_size_before: int,
        extra_size_after: int,
        nice_len: int,
        match_len_max: int,
        match_finder: MatchFinder,
    ) -> None:
        self.buf_size = get_buf_size(
            dict_size, extra_size_before, extra_size_after, match_len_max
        )
        self.buf = bytearray(self.buf_size)
        self.keep_size_before = extra_size_before + dict_size
        self.keep_size_after = extra_size_after + match_len_max
        self.match_len_max = match_len_max
        self.nice_len = nice_len
        self.read_pos = -1
        self.read_limit = -1
        self.finishing = False
        self.write_pos = 0
        self.pending_size = 0
        self.match_finder = match_finder

    def is_started(self) -> bool:
        return self.read_pos != -1

    def set_preset_dict(self, dict_size: int, preset_dict: bytes) -> None:
        """Load the tail of ``preset_dict`` into the window before any input."""
        if self.is_started() or self.write_pos != 0:
            raise RuntimeError("a preset dictionary must be set before any input")
        copy_size = min(len(preset_dict), dict_size)
        offset = len(preset_dict) - copy_size
        self.buf[:copy_size] = preset_dict[offset:offset + copy_size]
        self.write_pos += copy_size
        self.match_finder.skip(self, copy_size)

    def _move_window(self) -> None:
        move_offset = (self.read_pos + 1 - self.keep_size_before) & ~15
        move_size = self.write_pos - move_offset
        self.buf[:move_size] = self.buf[move_offset:move_offset + move_size]
        self.read_pos -= move_offset
        self.read_limit -= move_offset
        self.write_pos -= move_offset

    def fill_window(self, data: bytes) -> int:
        """Append as much of ``data`` as fits; return how many bytes were taken."""
        if self.finishing:
            raise RuntimeError("cannot add input after finishing")
        if self.read_pos >= self.buf_size - self.keep_size_after:
            self._move_window()
        length = min(len(data), self.buf_size - self.write_pos)
        self.buf[self.write_pos:self.write_pos + length] = data[:length]
        self.write_pos += length
        if self.write_pos >= self.keep_size_after:
            self.read_limit = self.write_pos - self.keep_size_after
        self._process_pending_bytes()
        return length

    def _process_pending_bytes(self) -> None:
        if self.pending_size > 0 and self.read_pos < self.read_limit:
            self.read_pos -= self.pending_size
            old_pending = self.pending_size
            self.pending_size = 0
            self.match_finder.skip(self, old_pending)

    def set_flushing(self) -> None:
        self.read_limit = self.write_pos - 1
        self._process_pending_bytes()

    def set_finishing(self) -> None:
        self.read_limit = self.write_pos - 1
        self.finishing = True
        self._process_pending_bytes()

    def has_enough_data(self, already_read_len: int) -> bool:
        return self.read_pos - already_read_len < self.read_limit

    def copy_uncompressed(self, out: BinaryIO, backward: int, length: int) -> None:
        """Write ``length`` window bytes, starting ``backward`` bytes back, to ``out``."""
        start = self.read_pos + 1 - backward
        out.write(bytes(self.buf[start:start + length]))

    def get_avail(self) -> int:
        if self.read_pos == -1:
            raise RuntimeError("the encoder has not started reading")
        return self.write_pos - self.read_pos

    def get_pos(self) -> int:
        return self.read_pos

    def get_byte(self, forward: int, backward: int) -> int:
        return self.buf[self.read_pos + forward - backward]

    def get_byte_backward(self, backward: int) -> int:
        return self.buf[self.read_pos - backward]

    def get_current_byte(self) -> int:
        return self.buf[self.read_pos]

    def _match_len_at(self, cur_pos: int, dist: int, len_limit: int) -> int:
        buf = self.buf
        back_pos = cur_pos - dist - 1
        length = 0
        while length < len_limit and buf[cur_pos + length] == buf[back_pos + length]:
            length += 1
        return length

    def get_match_len(self, dist: int, len_limit: int) -> int:
        """Length of the match at distance ``dist`` from the read position."""
        return self._match_len_at(self.read_pos, dist, len_limit)

    def get_match_len2(self, forward: int, dist: int, len_limit: int) -> int:
        """Like :meth:`get_match_len`, but ``forward`` bytes past the read position."""
        return self._match_len_at(self.read_pos + forward, dist, len_limit)

    def verify_matches(self, matches: Matches) -> bool:
        """Check that every reported match has the length the window shows."""
        len_limit = min(self.get_avail(), self.match_len_max)
        return all(self.get_match_len(dist, len_limit) == length for length, dist in matches)

    def move_pos(self, required_for_flushing: int, required_for_finishing: int) -> int:
        """Advance the read position; return the bytes available, or 0 if pending."""
        if required_for_flushing < required_for_finishing:
            raise ValueError("flushing requirement must not be below finishing requirement")
        self.read_pos += 1
        avail = self.write_pos - self.read_pos
        if avail < required_for_flushing and (
            avail < required_for_finishing or not self.finishing
        ):
            self.pending_size += 1
            avail = 0
        return avail

    def find_matches(self) -> Matches:
        return self.match_finder.find_matches(self)

    def matches(self) -> Matches:
        return self.match_finder.matches()

    def skip(self, length: int) -> None:
        self.match_finder.skip(self, length)
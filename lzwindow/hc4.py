"""Hash-chain match finder over four-byte prefixes."""

from __future__ import annotations

from .hash234 import Hash234, hash234_mem_usage
from .lz_encoder import LZEncoder, Matches, normalize

MAX_POS = 0x7FFFFFFF


def hc4_mem_usage(dict_size: int) -> int:
    """Approximate memory needed by an HC4 match finder, in KiB."""
    return hash234_mem_usage(dict_size) + dict_size // (1024 // 4) + 10


class HC4:
    """Match finder that follows a chain of earlier positions with equal hashes."""

    def __init__(self, dict_size: int, nice_len: int, depth_limit: int) -> None:
        self.hash = Hash234(dict_size)
        self.cyclic_size = dict_size + 1
        self.chain = [0] * self.cyclic_size
        self._matches = Matches(nice_len - 1)
        self.depth_limit = depth_limit if depth_limit > 0 else 4 + nice_len // 4
        self.cyclic_pos = -1
        self.lz_pos = self.cyclic_size

    def _move_pos(self, encoder: LZEncoder) -> int:
        avail = encoder.move_pos(4, 4)
        if avail != 0:
            self.lz_pos += 1
            if self.lz_pos == MAX_POS:
                offset = MAX_POS - self.cyclic_size
                self.hash.normalize(offset)
                normalize(self.chain, offset)
                self.lz_pos -= offset
            self.cyclic_pos += 1
            if self.cyclic_pos == self.cyclic_size:
                self.cyclic_pos = 0
        return avail

    def find_matches(self, encoder: LZEncoder) -> Matches:
        """Find matches at the next position, shortest first."""
        matches = self._matches
        matches.count = 0
        match_len_limit = encoder.match_len_max
        nice_len_limit = encoder.nice_len
        avail = self._move_pos(encoder)

        if avail < match_len_limit:
            if avail == 0:
                return matches
            match_len_limit = avail
            nice_len_limit = min(nice_len_limit, avail)

        self.hash.calc_hashes(encoder.buf, encoder.read_pos)
        delta2 = self.lz_pos - self.hash.hash2_pos()
        delta3 = self.lz_pos - self.hash.hash3_pos()
        current_match = self.hash.hash4_pos()
        self.hash.update_tables(self.lz_pos)
        self.chain[self.cyclic_pos] = current_match
        len_best = 0

        if delta2 < self.cyclic_size and (
            encoder.get_byte_backward(delta2) == encoder.get_current_byte()
        ):
            len_best = 2
            matches.lens[0] = 2
            matches.dists[0] = delta2 - 1
            matches.count = 1

        if (
            delta2 != delta3
            and delta3 < self.cyclic_size
            and encoder.get_byte(0, delta3) == encoder.get_current_byte()
        ):
            len_best = 3
            matches.dists[matches.count] = delta3 - 1
            matches.count += 1
            delta2 = delta3

        if matches.count > 0:
            while len_best < match_len_limit and (
                encoder.get_byte(len_best, delta2) == encoder.get_byte(len_best, 0)
            ):
                len_best += 1
            matches.lens[matches.count - 1] = len_best
            if len_best >= nice_len_limit:
                return matches

        len_best = max(len_best, 3)
        depth = self.depth_limit
        while True:
            delta = self.lz_pos - current_match
            if depth == 0 or delta >= self.cyclic_size:
                return matches
            depth -= 1

            index = self.cyclic_pos - delta
            if delta > self.cyclic_pos:
                index += self.cyclic_size
            current_match = self.chain[index]

            if encoder.get_byte(len_best, delta) == encoder.get_byte(len_best, 0) and (
                encoder.get_byte(0, delta) == encoder.get_current_byte()
            ):
                length = 1
                while length < match_len_limit and (
                    encoder.get_byte(length, delta) == encoder.get_byte(length, 0)
                ):
                    length += 1

                if length > len_best:
                    len_best = length
                    matches.lens[matches.count] = length
                    matches.dists[matches.count] = delta - 1
                    matches.count += 1
                    if length >= nice_len_limit:
                        return matches

    def matches(self) -> Matches:
        """The matches found by the latest search."""
        return self._matches

    def skip(self, encoder: LZEncoder, length: int) -> None:
        """Advance ``length`` positions, recording them without searching."""
        for _ in range(length):
            if self._move_pos(encoder) != 0:
                self.hash.calc_hashes(encoder.buf, encoder.read_pos)
                self.chain[self.cyclic_pos] = self.hash.hash4_pos()
                self.hash.update_tables(self.lz_pos)
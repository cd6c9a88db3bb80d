"""Binary-tree match finder over four-byte prefixes."""

from __future__ import annotations

from .hash234 import Hash234
from .lz_encoder import LZEncoder, Matches, normalize

MAX_POS = 0x7FFFFFFF


class BT4:
    """Match finder that keeps earlier positions in a binary search tree."""

    def __init__(self, dict_size: int, nice_len: int, depth_limit: int) -> None:
        self.cyclic_size = dict_size + 1
        self.hash = Hash234(dict_size)
        self.tree = [0] * (self.cyclic_size * 2)
        self._matches = Matches(nice_len - 1)
        self.depth_limit = depth_limit if depth_limit > 0 else 16 + nice_len // 2
        self.cyclic_pos = -1
        self.lz_pos = self.cyclic_size

    def _move_pos(self, encoder: LZEncoder) -> int:
        avail = encoder.move_pos(encoder.nice_len, 0)
        if avail != 0:
            self.lz_pos += 1
            if self.lz_pos == MAX_POS:
                offset = MAX_POS - self.cyclic_size
                self.hash.normalize(offset)
                normalize(self.tree, offset)
                self.lz_pos -= offset
            self.cyclic_pos += 1
            if self.cyclic_pos == self.cyclic_size:
                self.cyclic_pos = 0
        return avail

    def _pair_index(self, delta: int) -> int:
        pair = self.cyclic_pos - delta
        if delta > self.cyclic_pos:
            pair += self.cyclic_size
        return pair << 1

    def _update_tree(self, encoder: LZEncoder, nice_len_limit: int, current_match: int) -> None:
        tree = self.tree
        depth = self.depth_limit
        ptr0 = (self.cyclic_pos << 1) + 1
        ptr1 = self.cyclic_pos << 1
        len0 = 0
        len1 = 0

        while True:
            delta = self.lz_pos - current_match
            if depth == 0 or delta >= self.cyclic_size:
                tree[ptr0] = 0
                tree[ptr1] = 0
                return
            depth -= 1

            pair = self._pair_index(delta)
            length = min(len0, len1)

            if encoder.get_byte(length, delta) == encoder.get_byte(length, 0):
                # Only the tree is updated here, so matches longer than the
                # nice length are of no interest.
                while True:
                    length += 1
                    if length == nice_len_limit:
                        tree[ptr1] = tree[pair]
                        tree[ptr0] = tree[pair + 1]
                        return
                    if encoder.get_byte(length, delta) != encoder.get_byte(length, 0):
                        break

            if encoder.get_byte(length, delta) < encoder.get_byte(length, 0):
                tree[ptr1] = current_match
                ptr1 = pair + 1
                current_match = tree[ptr1]
                len1 = length
            else:
                tree[ptr0] = current_match
                ptr0 = pair
                current_match = tree[ptr0]
                len0 = length

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

        len_best = 0

        # The hashing guarantees that if the first byte matches, so does
        # the second (and the third for the three-byte hash).
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
            and encoder.get_byte_backward(delta3) == encoder.get_current_byte()
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
                self._update_tree(encoder, nice_len_limit, current_match)
                return matches

        len_best = max(len_best, 3)
        tree = self.tree
        depth = self.depth_limit
        ptr0 = (self.cyclic_pos << 1) + 1
        ptr1 = self.cyclic_pos << 1
        len0 = 0
        len1 = 0

        while True:
            delta = self.lz_pos - current_match
            if depth == 0 or delta >= self.cyclic_size:
                tree[ptr0] = 0
                tree[ptr1] = 0
                return matches
            depth -= 1

            pair = self._pair_index(delta)
            length = min(len0, len1)

            if encoder.get_byte(length, delta) == encoder.get_byte(length, 0):
                length += 1
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
                        tree[ptr1] = tree[pair]
                        tree[ptr0] = tree[pair + 1]
                        return matches

            if encoder.get_byte(length, delta) < encoder.get_byte(length, 0):
                tree[ptr1] = current_match
                ptr1 = pair + 1
                current_match = tree[ptr1]
                len1 = length
            else:
                tree[ptr0] = current_match
                ptr0 = pair
                current_match = tree[ptr0]
                len0 = length

    def matches(self) -> Matches:
        """The matches found by the latest search."""
        return self._matches

    def skip(self, encoder: LZEncoder, length: int) -> None:
        """Advance ``length`` positions, inserting them into the tree."""
        for _ in range(length):
            nice_len_limit = encoder.nice_len
            avail = self._move_pos(encoder)
            if avail < nice_len_limit:
                if avail == 0:
                    continue
                nice_len_limit = avail

            self.hash.calc_hashes(encoder.buf, encoder.read_pos)
            current_match = self.hash.hash4_pos()
            self.hash.update_tables(self.lz_pos)
            self._update_tree(encoder, nice_len_limit, current_match)
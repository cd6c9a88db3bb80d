"""Two-, three- and four-byte hash tables used by the match finders."""

from __future__ import annotations

from collections.abc import Sequence

from .lz_encoder import normalize

HASH2_SIZE = 1 << 10
HASH2_MASK = HASH2_SIZE - 1
HASH3_SIZE = 1 << 16
HASH3_MASK = HASH3_SIZE - 1

_U32 = 0xFFFFFFFF


def _make_crc_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (c >> 1) ^ 0xEDB88320 if c & 1 else c >> 1
        table.append(c)
    return tuple(table)


_CRC_TABLE = _make_crc_table()


def get_hash4_size(dict_size: int) -> int:
    """Return the number of entries in the four-byte hash table."""
    h = (dict_size - 1) & _U32
    h |= h >> 1
    h |= h >> 2
    h |= h >> 4
    h |= h >> 8
    h >>= 1
    h |= 0xFFFF
    if h > (1 << 24):
        h >>= 1
    return h + 1


def hash234_mem_usage(dict_size: int) -> int:
    """Approximate memory needed by the hash tables, in KiB."""
    return (HASH2_MASK + HASH2_SIZE + get_hash4_size(dict_size)) // (1024 // 4) + 4


class Hash234:
    """Hash tables mapping short byte prefixes to their latest position."""

    def __init__(self, dict_size: int) -> None:
        self.hash4_size = get_hash4_size(dict_size)
        self.hash4_mask = self.hash4_size - 1
        self.hash2_table = [0] * HASH2_SIZE
        self.hash3_table = [0] * HASH3_SIZE
        self.hash4_table = [0] * self.hash4_size
        self._hash2_value = 0
        self._hash3_value = 0
        self._hash4_value = 0

    def calc_hashes(self, buf: Sequence[int], pos: int) -> None:
        """Compute the hashes of the four bytes starting at ``buf[pos]``."""
        tmp = _CRC_TABLE[buf[pos]] ^ buf[pos + 1]
        self._hash2_value = tmp & HASH2_MASK
        tmp ^= buf[pos + 2] << 8
        self._hash3_value = tmp & HASH3_MASK
        tmp ^= (_CRC_TABLE[buf[pos + 3]] << 5) & _U32
        self._hash4_value = tmp & self.hash4_mask

    def hash2_pos(self) -> int:
        return self.hash2_table[self._hash2_value]

    def hash3_pos(self) -> int:
        return self.hash3_table[self._hash3_value]

    def hash4_pos(self) -> int:
        return self.hash4_table[self._hash4_value]

    def update_tables(self, pos: int) -> None:
        """Record ``pos`` as the latest position for the current hashes."""
        self.hash2_table[self._hash2_value] = pos
        self.hash3_table[self._hash3_value] = pos
        self.hash4_table[self._hash4_value] = pos

    def normalize(self, offset: int) -> None:
        """Shift every stored position down by ``offset``, clamping at zero."""
        normalize(self.hash2_table, offset)
        normalize(self.hash3_table, offset)
        normalize(self.hash4_table, offset)
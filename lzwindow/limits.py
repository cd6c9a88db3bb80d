"""Header parsing, property decoding and memory estimates for LZMA and LZMA2 readers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

from .coder import DICT_SIZE_MAX, DICT_SIZE_MIN, CorruptedDataError

PROPS_BYTE_MAX = (4 * 5 + 4) * 9 + 8
LZMA2_COMPRESSED_SIZE_MAX = 1 << 16
UNKNOWN_SIZE = 0xFFFFFFFFFFFFFFFF
_KNOWN_SIZE_MAX = UNKNOWN_SIZE // 2
_U32 = 0xFFFFFFFF

_HEADER = struct.Struct("<BIQ")


class MemoryLimitError(MemoryError):
    """Raised when decoding would need more memory than the caller allows."""

    def __init__(self, needed_kb: int, limit_kb: int) -> None:
        super().__init__(f"{needed_kb}kb memory needed, but limit was {limit_kb}kb")
        self.needed_kb = needed_kb
        self.limit_kb = limit_kb


@dataclass(frozen=True)
class LZMAProps:
    """Literal context bits, literal position bits and position bits."""

    lc: int
    lp: int
    pb: int

    @property
    def byte(self) -> int:
        """The properties byte that encodes these values."""
        return (self.pb * 5 + self.lp) * 9 + self.lc


@dataclass(frozen=True)
class LZMAHeader:
    """The thirteen-byte header that starts a raw LZMA stream."""

    props: LZMAProps
    dict_size: int
    uncompressed_size: int

    @property
    def size_known(self) -> bool:
        """Whether the header states the uncompressed size."""
        return self.uncompressed_size <= _KNOWN_SIZE_MAX

    @property
    def window_size(self) -> int:
        """Dictionary buffer size a decoder of this stream needs."""
        size = lzma_dict_size(self.dict_size)
        if self.size_known and size > self.uncompressed_size:
            size = lzma_dict_size(self.uncompressed_size)
        return size


def _split_props(props_byte: int) -> LZMAProps:
    pb = props_byte // (9 * 5)
    rest = props_byte - pb * 9 * 5
    lp = rest // 9
    lc = rest - lp * 9
    return LZMAProps(lc, lp, pb)


def decode_props(props_byte: int) -> LZMAProps:
    """Decode an LZMA properties byte."""
    if not 0 <= props_byte <= PROPS_BYTE_MAX:
        raise CorruptedDataError("Invalid props byte")
    return _split_props(props_byte)


def _check_dict_size(dict_size: int) -> None:
    if dict_size > DICT_SIZE_MAX:
        raise ValueError("dict size too large")


def lzma_dict_size(dict_size: int) -> int:
    """Dictionary size an LZMA decoder allocates for ``dict_size``."""
    _check_dict_size(dict_size)
    dict_size = max(dict_size, DICT_SIZE_MIN)
    return (dict_size + 15) & ~15


def lzma_memory_usage(dict_size: int, lc: int, lp: int) -> int:
    """Approximate memory needed by an LZMA decoder, in KiB."""
    if lc > 8 or lp > 4:
        raise ValueError("Invalid lc or lp")
    return 10 + lzma_dict_size(dict_size) // 1024 + ((2 * 0x300) << (lc + lp)) // 1024


def lzma_memory_usage_by_props(dict_size: int, props_byte: int) -> int:
    """Approximate memory needed by an LZMA decoder given its properties byte, in KiB."""
    _check_dict_size(dict_size)
    if not 0 <= props_byte <= PROPS_BYTE_MAX:
        raise ValueError("Invalid props byte")
    props = props_byte % (9 * 5)
    lp = props // 9
    lc = props - lp * 9
    return lzma_memory_usage(dict_size, lc, lp)


def read_lzma_header(stream: BinaryIO, mem_limit_kb: int | None = None) -> LZMAHeader:
    """Read and check an LZMA header, refusing streams above ``mem_limit_kb``."""
    raw = stream.read(_HEADER.size)
    if len(raw) != _HEADER.size:
        raise EOFError("unexpected end of input while reading the LZMA header")
    props_byte, dict_size, uncompressed_size = _HEADER.unpack(raw)
    needed = lzma_memory_usage_by_props(dict_size, props_byte)
    if mem_limit_kb is not None and mem_limit_kb < needed:
        raise MemoryLimitError(needed, mem_limit_kb)
    return LZMAHeader(decode_props(props_byte), dict_size, uncompressed_size)


def lzma2_dict_size(dict_size: int) -> int:
    """Dictionary size an LZMA2 decoder allocates for ``dict_size``."""
    return ((dict_size + 15) & ~15) & _U32


def lzma2_memory_usage(dict_size: int) -> int:
    """Approximate memory needed by an LZMA2 decoder, in KiB."""
    return 40 + LZMA2_COMPRESSED_SIZE_MAX // 1024 + lzma2_dict_size(dict_size) // 1024


def decode_lzma2_props(props_byte: int) -> LZMAProps:
    """Decode the properties byte of an LZMA2 chunk."""
    if not 0 <= props_byte <= PROPS_BYTE_MAX:
        raise CorruptedDataError("Corrupted input data (LZMA2:3)")
    props = _split_props(props_byte)
    if props.lc + props.lp > 4:
        raise CorruptedDataError("Corrupted input data (LZMA2:4)")
    return props
"""Match finder selection and the memory estimates that depend on it."""

from __future__ import annotations

import enum

from .bt4 import BT4
from .hc4 import HC4, hc4_mem_usage
from .lz_encoder import LZEncoder, get_buf_size


class MFType(enum.Enum):
    """Kind of match finder an encoder walks its window with."""

    HC4 = "hc4"
    BT4 = "bt4"


def new_hc4(
    dict_size: int,
    extra_size_before: int,
    extra_size_after: int,
    nice_len: int,
    match_len_max: int,
    depth_limit: int,
) -> LZEncoder:
    """Create an encoder window driven by a hash-chain match finder."""
    return LZEncoder(
        dict_size,
        extra_size_before,
        extra_size_after,
        nice_len,
        match_len_max,
        HC4(dict_size, nice_len, depth_limit),
    )


def new_bt4(
    dict_size: int,
    extra_size_before: int,
    extra_size_after: int,
    nice_len: int,
    match_len_max: int,
    depth_limit: int,
) -> LZEncoder:
    """Create an encoder window driven by a binary-tree match finder."""
    return LZEncoder(
        dict_size,
        extra_size_before,
        extra_size_after,
        nice_len,
        match_len_max,
        BT4(dict_size, nice_len, depth_limit),
    )


def mf_mem_usage(mf: MFType, dict_size: int) -> int:
    """Approximate memory needed by the match finder ``mf``, in KiB."""
    if mf is MFType.HC4:
        return hc4_mem_usage(dict_size)
    raise ValueError(f"no memory usage estimate is available for {mf.name}")


def lz_encoder_mem_usage(
    dict_size: int,
    extra_size_before: int,
    extra_size_after: int,
    match_len_max: int,
    mf: MFType,
) -> int:
    """Approximate memory needed by an encoder window and its match finder."""
    return get_buf_size(
        dict_size, extra_size_before, extra_size_after, match_len_max
    ) + mf_mem_usage(mf, dict_size)
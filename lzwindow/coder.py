"""Shared constants and probability models of the LZMA range coder."""

from __future__ import annotations

DICT_SIZE_MIN = 4096
DICT_SIZE_MAX = 0xFFFFFFFF & ~15

LOW_SYMBOLS = 1 << 3
MID_SYMBOLS = 1 << 3
HIGH_SYMBOLS = 1 << 8

POS_STATES_MAX = 1 << 4
MATCH_LEN_MIN = 2
MATCH_LEN_MAX = MATCH_LEN_MIN + LOW_SYMBOLS + MID_SYMBOLS + HIGH_SYMBOLS - 1

DIST_STATES = 4
DIST_SLOTS = 1 << 6
DIST_MODEL_START = 4
DIST_MODEL_END = 14
FULL_DISTANCES = 1 << (DIST_MODEL_END // 2)

ALIGN_BITS = 4
ALIGN_SIZE = 1 << ALIGN_BITS
ALIGN_MASK = ALIGN_SIZE - 1

REPS = 4

SHIFT_BITS = 8
TOP_MASK = 0xFF000000
BIT_MODEL_TOTAL_BITS = 11
BIT_MODEL_TOTAL = 1 << BIT_MODEL_TOTAL_BITS
PROB_INIT = BIT_MODEL_TOTAL // 2
MOVE_BITS = 5

LITERAL_PROBS = 0x300


class CorruptedDataError(ValueError):
    """Raised when compressed input cannot be valid."""


def init_probs(probs: list[int]) -> None:
    """Reset every probability in ``probs`` to the initial value, in place."""
    probs[:] = [PROB_INIT] * len(probs)


def _dist_state(length: int) -> int:
    if length < MATCH_LEN_MIN:
        raise ValueError(f"match length {length} is below the minimum {MATCH_LEN_MIN}")
    if length < DIST_STATES + MATCH_LEN_MIN:
        return length - MATCH_LEN_MIN
    return DIST_STATES - 1


def coder_get_dict_size(length: int) -> int:
    """Return the distance-slot table index used for a match of ``length``."""
    return _dist_state(length)


def get_dist_state(length: int) -> int:
    """Return the distance state for a match of ``length``."""
    return _dist_state(length)


class LiteralCoder:
    """Selects the literal sub-coder from the previous byte and position."""

    def __init__(self, lc: int, lp: int) -> None:
        self.lc = lc
        self.literal_pos_mask = (1 << lp) - 1

    def get_sub_coder_index(self, prev_byte: int, pos: int) -> int:
        low = prev_byte >> (8 - self.lc)
        high = (pos & self.literal_pos_mask) << self.lc
        return low + high


class LiteralSubcoder:
    """Probability table for coding one literal byte."""

    def __init__(self) -> None:
        self.probs = [0] * LITERAL_PROBS

    def reset(self) -> None:
        init_probs(self.probs)


class LengthCoder:
    """Probability tables for coding match lengths."""

    def __init__(self) -> None:
        self.choice = [0, 0]
        self.low = [[0] * LOW_SYMBOLS for _ in range(POS_STATES_MAX)]
        self.mid = [[0] * MID_SYMBOLS for _ in range(POS_STATES_MAX)]
        self.high = [0] * HIGH_SYMBOLS

    def reset(self) -> None:
        init_probs(self.choice)
        for probs in self.low:
            init_probs(probs)
        for probs in self.mid:
            init_probs(probs)
        init_probs(self.high)
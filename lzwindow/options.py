"""Encoder settings for LZMA2 streams and their presets."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

from .coder import MATCH_LEN_MAX
from .finders import MFType, lz_encoder_mem_usage

COMPRESSED_SIZE_MAX = 64 << 10

FAST_EXTRA_SIZE_BEFORE = 1
FAST_EXTRA_SIZE_AFTER = MATCH_LEN_MAX - 1


class EncodeMode(enum.Enum):
    """How hard the encoder searches for the cheapest symbols."""

    FAST = "fast"
    NORMAL = "normal"


def get_extra_size_before(dict_size: int) -> int:
    """Extra window space kept before the dictionary for a given size."""
    return COMPRESSED_SIZE_MAX - dict_size if COMPRESSED_SIZE_MAX > dict_size else 0


def fast_mode_mem_usage(dict_size: int, extra_size_before: int, mf: MFType) -> int:
    """Approximate memory needed by the window of the fast encoder, in KiB."""
    return lz_encoder_mem_usage(
        dict_size,
        max(extra_size_before, FAST_EXTRA_SIZE_BEFORE),
        FAST_EXTRA_SIZE_AFTER,
        MATCH_LEN_MAX,
        mf,
    )


_PRESET_TO_DICT_SIZE = (
    1 << 18,
    1 << 20,
    1 << 21,
    1 << 22,
    1 << 22,
    1 << 23,
    1 << 23,
    1 << 24,
    1 << 25,
    1 << 26,
)
_PRESET_TO_DEPTH_LIMIT = (4, 8, 24, 48)


@dataclass
class LZMA2Options:
    """Settings of an LZMA2 encoder; the defaults are those of preset 6."""

    LC_DEFAULT: ClassVar[int] = 3
    LP_DEFAULT: ClassVar[int] = 0
    PB_DEFAULT: ClassVar[int] = 2
    NICE_LEN_MAX: ClassVar[int] = 273
    NICE_LEN_MIN: ClassVar[int] = 8
    DICT_SIZE_DEFAULT: ClassVar[int] = 8 << 20

    dict_size: int = 1 << 23
    lc: int = 3
    lp: int = 0
    pb: int = 2
    mode: EncodeMode = EncodeMode.NORMAL
    nice_len: int = 64
    mf: MFType = MFType.BT4
    depth_limit: int = 0
    preset_dict: bytes | None = None

    @classmethod
    def from_preset(cls, preset: int) -> "LZMA2Options":
        """Options for compression level ``preset`` (0 to 9)."""
        options = cls()
        options.set_preset(preset)
        return options

    def set_preset(self, preset: int) -> None:
        """Apply compression level ``preset``; levels above 9 change nothing."""
        if preset < 0 or preset > 9:
            return
        self.lc = self.LC_DEFAULT
        self.lp = self.LP_DEFAULT
        self.pb = self.PB_DEFAULT
        self.dict_size = _PRESET_TO_DICT_SIZE[preset]
        if preset <= 3:
            self.mode = EncodeMode.FAST
            self.mf = MFType.HC4
            self.nice_len = 128 if preset <= 1 else self.NICE_LEN_MAX
            self.depth_limit = _PRESET_TO_DEPTH_LIMIT[preset]
        else:
            self.mode = EncodeMode.NORMAL
            self.mf = MFType.BT4
            self.nice_len = {4: 16, 5: 32}.get(preset, 64)
            self.depth_limit = 0

    def props_byte(self) -> int:
        """The properties byte that encodes ``lc``, ``lp`` and ``pb``."""
        return (self.pb * 5 + self.lp) * 9 + self.lc
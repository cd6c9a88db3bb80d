"""Sliding dictionary window used while decoding LZ-compressed data."""

from __future__ import annotations

from typing import BinaryIO

from .coder import CorruptedDataError


class LZDecoder:
    """Cyclic dictionary buffer that collects decoded bytes."""

    def __init__(self, dict_size: int, preset_dict: bytes | None = None) -> None:
        self._buf = bytearray(dict_size)
        self._buf_size = dict_size
        self._start = 0
        self._pos = 0
        self._full = 0
        self._limit = 0
        self._pending_len = 0
        self._pending_dist = 0
        if preset_dict:
            size = min(len(preset_dict), dict_size)
            self._buf[:size] = preset_dict[len(preset_dict) - size:]
            self._pos = self._full = self._start = size

    @property
    def pos(self) -> int:
        """Current write position in the dictionary buffer."""
        return self._pos

    def reset(self) -> None:
        self._start = 0
        self._pos = 0
        self._full = 0
        self._limit = 0
        self._buf[self._buf_size - 1] = 0

    def set_limit(self, out_max: int) -> None:
        self._limit = min(out_max + self._pos, self._buf_size)

    def has_space(self) -> bool:
        return self._pos < self._limit

    def has_pending(self) -> bool:
        return self._pending_len > 0

    def get_byte(self, dist: int) -> int:
        """Return the byte ``dist + 1`` positions behind the write position."""
        if dist >= self._pos:
            offset = self._buf_size + self._pos - dist - 1
        else:
            offset = self._pos - dist - 1
        return self._buf[offset]

    def put_byte(self, b: int) -> None:
        self._buf[self._pos] = b
        self._pos += 1
        if self._full < self._pos:
            self._full = self._pos

    def repeat(self, dist: int, length: int) -> None:
        """Copy ``length`` bytes from ``dist + 1`` bytes back, up to the limit."""
        if dist >= self._full:
            raise CorruptedDataError("dist overflow")
        left = min(self._limit - self._pos, length)
        self._pending_len = length - left
        self._pending_dist = dist

        if self._pos < dist + 1:
            # The distance wraps to the end of the cyclic buffer, which is
            # only possible once the dictionary is full.
            back = self._buf_size + self._pos - dist - 1
            copy_size = min(self._buf_size - back, left)
            self._buf[self._pos:self._pos + copy_size] = self._buf[back:back + copy_size]
            self._pos += copy_size
            left -= copy_size
            if left == 0:
                return
            back = 0
        else:
            back = self._pos - dist - 1

        while left > 0:
            copy_size = min(left, self._pos - back)
            self._buf[self._pos:self._pos + copy_size] = self._buf[back:back + copy_size]
            self._pos += copy_size
            left -= copy_size

        if self._full < self._pos:
            self._full = self._pos

    def repeat_pending(self) -> None:
        if self._pending_len > 0:
            self.repeat(self._pending_dist, self._pending_len)

    def copy_uncompressed(self, stream: BinaryIO, length: int) -> None:
        """Read up to ``length`` raw bytes from ``stream`` into the window."""
        copy_size = min(self._buf_size - self._pos, length)
        data = stream.read(copy_size)
        if len(data) != copy_size:
            raise EOFError("unexpected end of input while copying uncompressed data")
        self._buf[self._pos:self._pos + copy_size] = data
        self._pos += copy_size
        if self._full < self._pos:
            self._full = self._pos

    def flush(self) -> bytes:
        """Return the bytes decoded since the previous flush."""
        start = self._start
        copy_size = self._pos - start
        if self._pos == self._buf_size:
            self._pos = 0
        out = bytes(self._buf[start:start + copy_size])
        self._start = self._pos
        return out
"""Writer wrapper that counts the bytes passed through it."""

from __future__ import annotations

from typing import BinaryIO


class CountingWriter:
    """Forwards writes to an inner stream and tracks how many bytes it took."""

    def __init__(self, inner: BinaryIO) -> None:
        self.inner = inner
        self._written = 0

    @property
    def written(self) -> int:
        """Total number of bytes accepted by the inner stream."""
        return self._written

    def write(self, data: bytes) -> int:
        count = self.inner.write(data)
        if count is None:
            count = len(data)
        self._written += count
        return count

    def flush(self) -> None:
        self.inner.flush()
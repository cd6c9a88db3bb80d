import io

from hypothesis import given, strategies as st

from lzwindow.counting import CountingWriter


class _ShortWriter:
    def __init__(self, limit):
        self.limit = limit
        self.data = bytearray()
        self.flushes = 0

    def write(self, data):
        chunk = bytes(data[: self.limit])
        self.data += chunk
        return len(chunk)

    def flush(self):
        self.flushes += 1


class _SilentWriter:
    def __init__(self):
        self.data = bytearray()

    def write(self, data):
        self.data += data


@given(st.lists(st.binary(max_size=32), max_size=10))
def test_counts_all_written_bytes(chunks):
    sink = io.BytesIO()
    writer = CountingWriter(sink)
    returned = [writer.write(chunk) for chunk in chunks]
    assert returned == [len(c) for c in chunks]
    assert writer.written == sum(len(c) for c in chunks)
    assert sink.getvalue() == b"".join(chunks)


def test_counts_only_what_inner_accepted():
    inner = _ShortWriter(3)
    writer = CountingWriter(inner)
    assert writer.write(b"abcdef") == 3
    assert writer.written == 3
    assert bytes(inner.data) == b"abc"


def test_inner_without_count_uses_data_length():
    inner = _SilentWriter()
    writer = CountingWriter(inner)
    assert writer.write(b"xyz") == 3
    assert writer.written == 3
    assert bytes(inner.data) == b"xyz"


def test_flush_delegates():
    inner = _ShortWriter(10)
    writer = CountingWriter(inner)
    writer.flush()
    writer.flush()
    assert inner.flushes == 2
    assert writer.written == 0
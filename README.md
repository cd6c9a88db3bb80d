# lzwindow

Pure-Python building blocks for the LZMA and LZMA2 formats: the sliding-window
dictionaries used on both sides of the codec, the HC4 and BT4 match finders,
encoder presets, and the header, property and memory-limit checks a decoder
performs before it allocates anything. It has no dependencies outside the
standard library.

## Installation

```
pip install lzwindow
```

To run the test suite:

```
pip install "lzwindow[test]"
pytest
```

## What is inside

| Module | Contents |
| --- | --- |
| `lzwindow.coder` | Format constants (`MATCH_LEN_MIN`, `MATCH_LEN_MAX`, `DICT_SIZE_MAX`, ...), `init_probs`, `get_dist_state`, `coder_get_dict_size`, the probability tables `LiteralCoder`, `LiteralSubcoder` and `LengthCoder`, and `CorruptedDataError` |
| `lzwindow.lz_decoder` | `LZDecoder`, the decoder's cyclic dictionary with `put_byte`, `repeat`, `repeat_pending`, `copy_uncompressed` and `flush` |
| `lzwindow.counting` | `CountingWriter`, which forwards writes to an inner stream and keeps the total in `written` |
| `lzwindow.hash234` | `Hash234`, the 2-, 3- and 4-byte hash tables that feed the match finders, plus `get_hash4_size` and `hash234_mem_usage` |
| `lzwindow.lz_encoder` | `LZEncoder`, the encoder's input window, `Matches`, `normalize` and `get_buf_size` |
| `lzwindow.hc4` | `HC4`, the hash-chain match finder, and `hc4_mem_usage` |
| `lzwindow.bt4` | `BT4`, the binary-tree match finder |
| `lzwindow.finders` | `MFType`, `new_hc4`, `new_bt4`, `mf_mem_usage` and `lz_encoder_mem_usage` |
| `lzwindow.options` | `EncodeMode`, `LZMA2Options` with presets 0 to 9, `get_extra_size_before` and `fast_mode_mem_usage` |
| `lzwindow.limits` | `LZMAProps`, `LZMAHeader`, `decode_props`, `decode_lzma2_props`, `read_lzma_header`, the memory-usage estimates and `MemoryLimitError` |

Memory estimates are in KiB. `mf_mem_usage` (and so `lz_encoder_mem_usage`
and `fast_mode_mem_usage`) only has an estimate for `MFType.HC4`; for
`MFType.BT4` it raises `ValueError`.

## Examples

Pick encoder settings from a preset and get the properties byte:

```python
from lzwindow.options import LZMA2Options

opts = LZMA2Options.from_preset(6)
print(opts.dict_size, opts.mode, opts.props_byte())  # 8388608 EncodeMode.NORMAL 93
```

Find matches in a block of data with the hash-chain finder:

```python
from lzwindow.finders import new_hc4

enc = new_hc4(1 << 16, 0, 272, 64, 273, 0)
enc.fill_window(b"abcabcabcabc")
enc.set_finishing()
while enc.has_enough_data(0):
    matches = enc.find_matches()
    for length, dist in matches:
        print(enc.get_pos(), length, dist)
```

Each match is a length and a distance, where a distance of `d` means the match
starts `d + 1` bytes before the current position. Matches come shortest first.

Check an `.lzma` header against a memory budget before decoding:

```python
import io
import struct

from lzwindow.limits import MemoryLimitError, read_lzma_header

raw = struct.pack("<BIQ", 0x5D, 1 << 16, 0xFFFFFFFFFFFFFFFF)
header = read_lzma_header(io.BytesIO(raw))
print(header.props, header.size_known, header.window_size)

try:
    read_lzma_header(io.BytesIO(raw), mem_limit_kb=16)
except MemoryLimitError as exc:
    print("too large:", exc.needed_kb, exc.limit_kb)
```

Fill a decoder dictionary and read out what was decoded:

```python
from lzwindow.lz_decoder import LZDecoder

lz = LZDecoder(4096, None)
lz.set_limit(6)
lz.put_byte(ord("a"))
lz.put_byte(ord("b"))
lz.repeat(1, 4)
print(lz.flush())  # b"ababab"
```

Invalid input raises `CorruptedDataError` (a `ValueError`); running out of
input while reading raises `EOFError`.

## What it does not do

This package provides the parts around the range coder, not a compressor or
decompressor. There is no range encoder or decoder, no symbol-level LZMA
encoder or decoder, and no stream reader or writer for LZMA or LZMA2 data:
you cannot compress or decompress a file with it alone. There is also no
command-line tool.
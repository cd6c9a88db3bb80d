"""Sliding-window dictionaries, match finders, encoder presets and header checks for LZMA and LZMA2."""

__version__ = "0.1.0"
__all__ = [
    "bt4",
    "coder",
    "counting",
    "finders",
    "hash234",
    "hc4",
    "limits",
    "lz_decoder",
    "lz_encoder",
    "options",
]
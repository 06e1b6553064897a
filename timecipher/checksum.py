# Copyright (c) 2026, the timecipher authors
# 
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software, datasets, and associated documentation files (the "Software
# and Datasets"), to deal in the Software and Datasets without restriction,
# including without limitation the rights to use, copy, modify, merge, publish,
# distribute, sublicense, and/or sell copies of the Software and Datasets, and to
# permit persons to whom the Software is furnished to do so, subject to the
# following conditions:
# 
# The above copyright notice and this permission notice shall be included
# in all copies or substantial portions of the Software and Datasets.
#   
# THE SOFTWARE AND DATASETS ARE PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO
# EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR
# OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE AND DATASETS.


"""
Additive checksum over a text's code points, reduced modulo 2**width (wraps, never saturates).

Two summing rules:
  - "split" (default): every byte of each code point is a separate term, so U+0416
    contributes 0x16 + 0x04. Code points above U+FFFF add their third byte too;
    a 16-bit wchar_t build would instead sum the bytes of the two surrogate
    halves, so split checksums of astral text differ from such builds.
  - "codepoint": each full code point is one term.

A plain sum: swapping two characters leaves it unchanged, and two edits that
cancel out collide.
"""

from timecipher.errors import ConfigurationError

SPLIT = "split"
CODEPOINT = "codepoint"
MODES = (SPLIT, CODEPOINT)

DEFAULT_WIDTH = 8
DEFAULT_MODE = SPLIT


def _split_bytes(cp: int) -> int:
    total = 0
    while cp:
        total += cp & 0xFF
        cp >>= 8
    return total


def validate(width: int, mode: str):
    if not isinstance(width, int) or width < 1:
        raise ConfigurationError(f"Checksum width must be a positive number of bits, got {width!r}")
    if mode not in MODES:
        raise ConfigurationError(f"Unknown checksum mode {mode!r} (known: {', '.join(MODES)})")


def max_value(width: int = DEFAULT_WIDTH) -> int:
    return (1 << width) - 1


def checksum(text: str, width: int = DEFAULT_WIDTH, mode: str = DEFAULT_MODE) -> int:
    validate(width, mode)
    if mode == SPLIT:
        total = sum(_split_bytes(ord(ch)) for ch in text)
    else:
        total = sum(ord(ch) for ch in text)
    return total & max_value(width)

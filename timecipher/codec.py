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
Encoded message format: "<length>|<checksum>|<ciphertext>" on one line.

Length is the character count of the ciphertext and the checksum is taken over
the ciphertext, both in decimal. Only the first two delimiters are structural;
anything after the second one, delimiters included, is ciphertext.
"""

import re
from collections import namedtuple

from timecipher.checksum import DEFAULT_MODE, DEFAULT_WIDTH, validate
from timecipher.checksum import checksum as additive_checksum
from timecipher.errors import ChecksumMismatchError, ConfigurationError, FormatError, LengthMismatchError

DELIMITER = "|"

_NUMBER_RE = re.compile(r"[0-9]+")

EncodedMessage = namedtuple("EncodedMessage", ["length", "checksum", "ciphertext"])


def _parse_field(value: str, field: str) -> int:
    if not _NUMBER_RE.fullmatch(value):
        raise FormatError(f"{field} field is not a non-negative integer: {value!r}")
    return int(value)


class MessageCodec:
    def __init__(self, width: int = DEFAULT_WIDTH, mode: str = DEFAULT_MODE, delimiter: str = DELIMITER):
        validate(width, mode)
        if len(delimiter) != 1 or delimiter.isdigit():
            raise ConfigurationError(f"Delimiter must be a single non-digit character, got {delimiter!r}")
        self.width = width
        self.mode = mode
        self.delimiter = delimiter

    def __repr__(self):
        return f"MessageCodec(width={self.width}, mode={self.mode!r}, delimiter={self.delimiter!r})"

    def checksum(self, text: str) -> int:
        return additive_checksum(text, self.width, self.mode)

    def pack(self, ciphertext: str) -> EncodedMessage:
        return EncodedMessage(len(ciphertext), self.checksum(ciphertext), ciphertext)

    def format(self, message: EncodedMessage) -> str:
        d = self.delimiter
        return f"{message.length}{d}{message.checksum}{d}{message.ciphertext}"

    def encode(self, ciphertext: str) -> str:
        return self.format(self.pack(ciphertext))

    def parse(self, encoded: str) -> EncodedMessage:
        """Split into fields without checking length or checksum."""
        parts = encoded.split(self.delimiter, 2)
        if len(parts) < 3:
            raise FormatError(
                f"Expected '<length>{self.delimiter}<checksum>{self.delimiter}<ciphertext>', "
                f"found {len(parts) - 1} delimiter(s)"
            )
        length = _parse_field(parts[0], "Length")
        digest = _parse_field(parts[1], "Checksum")
        return EncodedMessage(length, digest, parts[2])

    def unpack(self, encoded: str) -> EncodedMessage:
        message = self.parse(encoded)
        actual_length = len(message.ciphertext)
        if actual_length != message.length:
            raise LengthMismatchError(message.length, actual_length)
        actual_checksum = self.checksum(message.ciphertext)
        if actual_checksum != message.checksum:
            raise ChecksumMismatchError(message.checksum, actual_checksum)
        return message

    def decode(self, encoded: str) -> str:
        return self.unpack(encoded).ciphertext


DEFAULT_CODEC = MessageCodec()


def encode(ciphertext: str) -> str:
    return DEFAULT_CODEC.encode(ciphertext)


def decode(encoded: str) -> str:
    return DEFAULT_CODEC.decode(encoded)

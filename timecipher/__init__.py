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
timecipher: substitution cipher over Latin, Cyrillic and digits with time-selected
tables and a "<length>|<checksum>|<ciphertext>" integrity wrapper.
"""

from timecipher.alphabets import DEFAULT_REGISTRY, Alphabet, AlphabetRegistry, CipherTable, load_registry
from timecipher.codec import EncodedMessage, MessageCodec, decode, encode
from timecipher.errors import (
    ChecksumMismatchError,
    CipherError,
    ConfigurationError,
    DecodeError,
    FormatError,
    LengthMismatchError,
    UnknownTableError,
)
from timecipher.pipeline import SealedMessage, checksum_report, decrypt_text, encrypt_text, open_sealed, seal
from timecipher.selector import capture_context, preset, select
from timecipher.substitution import DigitRotation, SubstitutionEngine, apply_map, build_maps

__version__ = "0.1.0"

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
Substitution engine.

build_maps() zips an alphabet with one of its tables into a forward map
(plain -> cipher) and an inverse map (cipher -> plain). apply_map() is total:
characters missing from the map are copied through unchanged.

Inverse maps are filled in alphabet order, so when a table sends two plain
characters to the same cipher character the later one wins. Such tables do not
round-trip; inverse_collisions() lists the affected characters.
"""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from timecipher.alphabets import DIGITS, Alphabet, CipherTable
from timecipher.errors import ConfigurationError

SubstitutionMap = Mapping[str, str]


# === Table lookup ===
def build_maps(alphabet: Alphabet, table: CipherTable) -> Tuple[SubstitutionMap, SubstitutionMap]:
    if len(table) != len(alphabet):
        raise ConfigurationError(
            f"Table {table.name!r} has {len(table)} characters, alphabet {alphabet.name!r} has {len(alphabet)}"
        )
    forward: Dict[str, str] = {}
    inverse: Dict[str, str] = {}
    for plain, cipher in zip(alphabet.characters, table.characters):
        forward[plain] = cipher
        inverse[cipher] = plain  # last writer wins
    return MappingProxyType(forward), MappingProxyType(inverse)


def apply_map(mapping: SubstitutionMap, text: str) -> str:
    return "".join(mapping.get(ch, ch) for ch in text)


def inverse_collisions(alphabet: Alphabet, table: CipherTable) -> Dict[str, List[str]]:
    """Cipher characters reached from more than one plain character, with their sources in order."""
    sources = defaultdict(list)
    for plain, cipher in zip(alphabet.characters, table.characters):
        sources[cipher].append(plain)
    return {cipher: plains for cipher, plains in sources.items() if len(plains) > 1}


# === Digit rotation ===
class DigitRotation:
    """
    d -> (d + shift) mod 10 for the ASCII digits. Defined for every digit, so
    unlike a table lookup there is no unmapped case inside its domain.
    """

    def __init__(self, shift: int):
        self.shift = shift % 10

    def __repr__(self):
        return f"DigitRotation({self.shift})"

    def rotate(self, digit: str) -> str:
        return DIGITS[(DIGITS.index(digit) + self.shift) % 10]

    def inverse(self) -> "DigitRotation":
        return DigitRotation(-self.shift)

    def apply(self, text: str) -> str:
        return "".join(self.rotate(ch) if ch in DIGITS else ch for ch in text)


# === Engine ===
class SubstitutionEngine:
    """Forward and inverse substitution for one alphabet/table pair."""

    def __init__(self, alphabet: Alphabet, table: CipherTable):
        self.alphabet = alphabet
        self.table = table
        self.forward, self.inverse = build_maps(alphabet, table)
        self.rotation: Optional[DigitRotation] = None
        if table.digit_shift is not None:
            self.rotation = DigitRotation(table.digit_shift)

    def __repr__(self):
        return f"SubstitutionEngine({self.alphabet.name}/{self.table.name})"

    def _run(self, mapping: SubstitutionMap, rotation: Optional[DigitRotation], text: str) -> str:
        if rotation is None:
            return apply_map(mapping, text)
        # Rotation owns the digits; the lookup never sees them.
        out = []
        for ch in text:
            if ch in DIGITS:
                out.append(rotation.rotate(ch))
            else:
                out.append(mapping.get(ch, ch))
        return "".join(out)

    def encrypt(self, text: str) -> str:
        return self._run(self.forward, self.rotation, text)

    def decrypt(self, text: str) -> str:
        rotation = self.rotation.inverse() if self.rotation is not None else None
        return self._run(self.inverse, rotation, text)

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
End-to-end helpers tying the registry, engine, selector and codec together.

    sealed = seal("Привет 2024", preset("hour"), capture_context())
    open_sealed(sealed.encoded, sealed.table)  # -> "Привет 2024"
"""

from collections import namedtuple
from typing import Optional

import pandas as pd

from timecipher.alphabets import DEFAULT_REGISTRY, AlphabetRegistry
from timecipher.codec import DEFAULT_CODEC, MessageCodec
from timecipher.config import DEFAULT_ALPHABET
from timecipher.selector import Context, Policy, select
from timecipher.substitution import SubstitutionEngine, inverse_collisions

SealedMessage = namedtuple("SealedMessage", ["table", "encoded"])

REPORT_COLUMNS = ["table", "length", "checksum", "ciphertext"]
ORIGINAL_ROW = "original"


def engine_for(table: str, alphabet: str = DEFAULT_ALPHABET,
               registry: Optional[AlphabetRegistry] = None) -> SubstitutionEngine:
    registry = registry or DEFAULT_REGISTRY
    return SubstitutionEngine(registry.alphabet(alphabet), registry.table(alphabet, table))


# === Plain transforms ===
def encrypt_text(text: str, table: str, alphabet: str = DEFAULT_ALPHABET,
                 registry: Optional[AlphabetRegistry] = None) -> str:
    return engine_for(table, alphabet, registry).encrypt(text)


def decrypt_text(text: str, table: str, alphabet: str = DEFAULT_ALPHABET,
                 registry: Optional[AlphabetRegistry] = None) -> str:
    return engine_for(table, alphabet, registry).decrypt(text)


# === Sealed messages ===
def seal(text: str, policy: Policy, context: Context, alphabet: str = DEFAULT_ALPHABET,
         codec: MessageCodec = DEFAULT_CODEC, registry: Optional[AlphabetRegistry] = None) -> SealedMessage:
    table = select(policy, context)
    ciphertext = encrypt_text(text, table, alphabet, registry)
    return SealedMessage(table, codec.encode(ciphertext))


def open_sealed(encoded: str, table: str, alphabet: str = DEFAULT_ALPHABET,
                codec: MessageCodec = DEFAULT_CODEC, registry: Optional[AlphabetRegistry] = None) -> str:
    ciphertext = codec.decode(encoded)
    return decrypt_text(ciphertext, table, alphabet, registry)


# === Reports ===
def checksum_report(text: str, alphabet: str = DEFAULT_ALPHABET, codec: MessageCodec = DEFAULT_CODEC,
                    registry: Optional[AlphabetRegistry] = None) -> pd.DataFrame:
    """One row for the input and one per table of the alphabet."""
    registry = registry or DEFAULT_REGISTRY
    rows = [(ORIGINAL_ROW, len(text), codec.checksum(text), text)]
    for table in registry.table_names(alphabet):
        ciphertext = encrypt_text(text, table, alphabet, registry)
        rows.append((table, len(ciphertext), codec.checksum(ciphertext), ciphertext))
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def collision_report(registry: Optional[AlphabetRegistry] = None) -> pd.DataFrame:
    """Inverse-map collisions per table; empty when every table is a permutation."""
    registry = registry or DEFAULT_REGISTRY
    rows = []
    for alphabet, table in registry.pairs():
        for cipher, plains in inverse_collisions(alphabet, table).items():
            rows.append((alphabet.name, table.name, cipher, "".join(plains), plains[-1]))
    return pd.DataFrame(rows, columns=["alphabet", "table", "cipher", "sources", "decrypts_to"])

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
Alphabet registry: the ordered character sets and the named cipher tables over them.

Tables live in references/*.csv next to this module and are read once, at import,
into DEFAULT_REGISTRY. Every table row is one permutation written out in full:

    alphabet,name,characters,alias_of,digit_shift
    full,forward-shift,NOPQ...,,
    full,reverse-order-alt,,reverse-order,

A row with empty `characters` and a non-empty `alias_of` reuses the characters of
another table of the same alphabet. `digit_shift` marks tables whose digits go
through numeric rotation instead of the lookup (see substitution.DigitRotation).
"""

import os
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import pandas as pd

from timecipher.errors import ConfigurationError, UnknownTableError

# === Paths ===
REFERENCES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "references")
ALPHABETS_CSV = os.path.join(REFERENCES_DIR, "alphabets.csv")
TABLES_CSV = os.path.join(REFERENCES_DIR, "cipher_tables.csv")

ALPHABET_COLUMNS = ["name", "characters"]
TABLE_COLUMNS = ["alphabet", "name", "characters", "alias_of", "digit_shift"]

DIGITS = "0123456789"

_SHIFT_RE = re.compile(r"[+-]?[0-9]+")


# === Data models ===
@dataclass(frozen=True)
class Alphabet:
    name: str
    characters: str
    description: str = ""
    _positions: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.characters:
            raise ConfigurationError(f"Alphabet {self.name!r} is empty")
        positions: Dict[str, int] = {}
        duplicates: List[str] = []
        for i, ch in enumerate(self.characters):
            if ch in positions:
                if ch not in duplicates:
                    duplicates.append(ch)
                continue
            positions[ch] = i
        if duplicates:
            raise ConfigurationError(
                f"Alphabet {self.name!r} repeats characters: {''.join(duplicates)!r}"
            )
        object.__setattr__(self, "_positions", MappingProxyType(positions))

    def __len__(self) -> int:
        return len(self.characters)

    def __contains__(self, ch) -> bool:
        return ch in self._positions

    def __iter__(self) -> Iterator[str]:
        return iter(self.characters)

    def position(self, ch: str) -> Optional[int]:
        return self._positions.get(ch)

    def char_at(self, index: int) -> str:
        return self.characters[index]


@dataclass(frozen=True)
class CipherTable:
    alphabet: str
    name: str
    characters: str
    digit_shift: Optional[int] = None
    alias_of: Optional[str] = None

    def __len__(self) -> int:
        return len(self.characters)


def _check_digits_stay_digits(alphabet: Alphabet, table: CipherTable):
    # With a digit rotation, digits never reach the lookup, so the lookup must
    # keep digits and non-digits apart in both directions.
    crossing = [
        f"{plain}->{cipher}"
        for plain, cipher in zip(alphabet.characters, table.characters)
        if (plain in DIGITS) != (cipher in DIGITS)
    ]
    if crossing:
        raise ConfigurationError(
            f"Table {table.alphabet}/{table.name} rotates digits but its lookup "
            f"crosses between digits and non-digits: {', '.join(crossing)}"
        )


class AlphabetRegistry:
    """
    Read-only collection of alphabets and their tables.

    Construction validates everything up front; a table whose length differs
    from its alphabet's, or a digit-rotating table whose lookup maps a digit to
    a non-digit or the reverse, aborts construction with ConfigurationError.
    """

    def __init__(self, alphabets: List[Alphabet], tables: List[CipherTable]):
        by_name: Dict[str, Alphabet] = {}
        for alphabet in alphabets:
            if alphabet.name in by_name:
                raise ConfigurationError(f"Alphabet {alphabet.name!r} defined twice")
            by_name[alphabet.name] = alphabet

        grouped: Dict[str, Dict[str, CipherTable]] = {name: {} for name in by_name}
        for table in tables:
            alphabet = by_name.get(table.alphabet)
            if alphabet is None:
                raise ConfigurationError(
                    f"Table {table.name!r} refers to unknown alphabet {table.alphabet!r}"
                )
            if table.name in grouped[table.alphabet]:
                raise ConfigurationError(
                    f"Table {table.name!r} defined twice for alphabet {table.alphabet!r}"
                )
            if len(table) != len(alphabet):
                raise ConfigurationError(
                    f"Table {table.alphabet}/{table.name} has {len(table)} characters, "
                    f"alphabet has {len(alphabet)}"
                )
            if table.digit_shift is not None:
                _check_digits_stay_digits(alphabet, table)
            grouped[table.alphabet][table.name] = table

        self._alphabets = MappingProxyType(by_name)
        self._tables = MappingProxyType(
            {name: MappingProxyType(group) for name, group in grouped.items()}
        )

    def alphabet(self, name: str) -> Alphabet:
        try:
            return self._alphabets[name]
        except KeyError:
            raise UnknownTableError(f"Unknown alphabet: {name!r}") from None

    def table(self, alphabet: str, name: str) -> CipherTable:
        group = self._tables.get(alphabet)
        if group is None:
            raise UnknownTableError(f"Unknown alphabet: {alphabet!r}")
        try:
            return group[name]
        except KeyError:
            raise UnknownTableError(
                f"Unknown table {name!r} for alphabet {alphabet!r} "
                f"(known: {', '.join(group) or 'none'})"
            ) from None

    def alphabet_names(self) -> List[str]:
        return list(self._alphabets)

    def table_names(self, alphabet: str) -> List[str]:
        self.alphabet(alphabet)
        return list(self._tables[alphabet])

    def pairs(self) -> Iterator[Tuple[Alphabet, CipherTable]]:
        for name, group in self._tables.items():
            for table in group.values():
                yield self._alphabets[name], table


# === CSV loading ===
def _read_reference_csv(path: str, required: List[str]) -> pd.DataFrame:
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigurationError(f"Reference table not found: {path}") from e
    except pd.errors.EmptyDataError as e:
        raise ConfigurationError(f"Reference table is empty: {path}") from e
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ConfigurationError(
            f"{os.path.basename(path)} missing required columns: {', '.join(missing)}"
        )
    return df


def _parse_shift(value: str, where: str) -> Optional[int]:
    value = value.strip()
    if not value:
        return None
    if not _SHIFT_RE.fullmatch(value):
        raise ConfigurationError(f"{where}: digit_shift must be an integer, got {value!r}")
    return int(value)


def _resolve_characters(key, rows, chain=()) -> str:
    characters, alias = rows[key]
    if characters or not alias:
        return characters
    target = (key[0], alias)
    if target == key or target in chain:
        raise ConfigurationError(f"Alias cycle at table {key[0]}/{key[1]}")
    if target not in rows:
        raise ConfigurationError(
            f"Table {key[0]}/{key[1]} is an alias of unknown table {alias!r}"
        )
    return _resolve_characters(target, rows, chain + (key,))


def registry_from_frames(alphabet_df: pd.DataFrame, table_df: pd.DataFrame) -> AlphabetRegistry:
    alphabets = [
        Alphabet(row["name"].strip(), row["characters"], row.get("description", ""))
        for _, row in alphabet_df.iterrows()
    ]

    rows: Dict[Tuple[str, str], Tuple[str, str]] = {}
    shifts: Dict[Tuple[str, str], Optional[int]] = {}
    for _, row in table_df.iterrows():
        key = (row["alphabet"].strip(), row["name"].strip())
        if key in rows:
            raise ConfigurationError(f"Table {key[0]}/{key[1]} defined twice")
        characters, alias = row["characters"], row["alias_of"].strip()
        if characters and alias:
            raise ConfigurationError(
                f"Table {key[0]}/{key[1]} gives both characters and alias_of"
            )
        rows[key] = (characters, alias)
        shifts[key] = _parse_shift(row["digit_shift"], f"Table {key[0]}/{key[1]}")

    tables = [
        CipherTable(
            alphabet=key[0],
            name=key[1],
            characters=_resolve_characters(key, rows),
            digit_shift=shifts[key],
            alias_of=rows[key][1] or None,
        )
        for key in rows
    ]
    return AlphabetRegistry(alphabets, tables)


def load_registry(alphabets_path: str = ALPHABETS_CSV, tables_path: str = TABLES_CSV) -> AlphabetRegistry:
    alphabet_df = _read_reference_csv(alphabets_path, ALPHABET_COLUMNS)
    table_df = _read_reference_csv(tables_path, TABLE_COLUMNS)
    return registry_from_frames(alphabet_df, table_df)


DEFAULT_REGISTRY = load_registry()

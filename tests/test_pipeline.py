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


from datetime import datetime

import pytest

from timecipher.codec import DEFAULT_CODEC, MessageCodec
from timecipher.errors import ChecksumMismatchError, UnknownTableError
from timecipher.pipeline import (
    ORIGINAL_ROW,
    REPORT_COLUMNS,
    SealedMessage,
    checksum_report,
    collision_report,
    decrypt_text,
    encrypt_text,
    open_sealed,
    seal,
)
from timecipher.selector import FixedPolicy, preset

EVEN_HOUR = datetime(2026, 10, 19, 14, 0)
ODD_HOUR = datetime(2026, 10, 19, 15, 0)
TEXT = "Привет, World! Ёжик 2026\n"


def test_scenario_with_custom_registry(abc_registry):
    sealed = seal("AAB", FixedPolicy("rotate"), EVEN_HOUR, "abc", registry=abc_registry)
    assert sealed == SealedMessage("rotate", "3|199|BBC")
    assert open_sealed("3|199|BBC", "rotate", "abc", registry=abc_registry) == "AAB"


def test_seal_uses_policy_choice():
    even = seal(TEXT, preset("hour"), EVEN_HOUR)
    odd = seal(TEXT, preset("hour"), ODD_HOUR)
    assert even.table == "reverse-order"
    assert odd.table == "reverse-order-alt"
    # the two tables are aliases, so the payloads agree
    assert even.encoded == odd.encoded
    assert open_sealed(even.encoded, even.table) == TEXT


def test_open_with_wrong_table_does_not_round_trip():
    sealed = seal(TEXT, FixedPolicy("forward-shift"), EVEN_HOUR)
    assert open_sealed(sealed.encoded, "reverse-order") != TEXT


def test_open_rejects_tampering():
    sealed = seal(TEXT, FixedPolicy("forward-shift"), EVEN_HOUR)
    tampered = sealed.encoded[:-2] + "X" + sealed.encoded[-1:]
    with pytest.raises(ChecksumMismatchError):
        open_sealed(tampered, "forward-shift")


def test_plain_transforms():
    assert encrypt_text("HELLO123", "forward-shift") == "URYYB678"
    assert decrypt_text("URYYB678", "forward-shift") == "HELLO123"
    assert decrypt_text(encrypt_text(TEXT, "reverse-order", "legacy"), "reverse-order", "legacy") == TEXT


def test_unknown_table():
    with pytest.raises(UnknownTableError):
        encrypt_text("abc", "rot47")
    with pytest.raises(UnknownTableError):
        seal("abc", FixedPolicy("reverse-order"), EVEN_HOUR, alphabet="upper")


def test_seal_with_codepoint_codec():
    codec = MessageCodec(width=32, mode="codepoint")
    sealed = seal(TEXT, preset("minute"), EVEN_HOUR, codec=codec)
    assert open_sealed(sealed.encoded, sealed.table, codec=codec) == TEXT
    with pytest.raises(ChecksumMismatchError):
        open_sealed(sealed.encoded, sealed.table)


def test_checksum_report():
    report = checksum_report(TEXT)
    assert list(report.columns) == REPORT_COLUMNS
    assert list(report["table"]) == [ORIGINAL_ROW, "forward-shift", "reverse-order", "reverse-order-alt"]
    assert set(report["length"]) == {len(TEXT)}
    original = report.iloc[0]
    assert original["ciphertext"] == TEXT
    assert original["checksum"] == DEFAULT_CODEC.checksum(TEXT)
    for _, row in report.iloc[1:].iterrows():
        assert row["checksum"] == DEFAULT_CODEC.checksum(row["ciphertext"])
    assert report.iloc[2]["ciphertext"] == report.iloc[3]["ciphertext"]


def test_collision_report_empty_for_shipped_tables():
    report = collision_report()
    assert report.empty
    assert list(report.columns) == ["alphabet", "table", "cipher", "sources", "decrypts_to"]

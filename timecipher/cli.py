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


import argparse
import sys
from datetime import datetime
from typing import List, Optional

from timecipher.alphabets import DEFAULT_REGISTRY, Alphabet, AlphabetRegistry, CipherTable
from timecipher.checksum import DEFAULT_MODE, DEFAULT_WIDTH, MODES
from timecipher.codec import MessageCodec
from timecipher.config import CipherConfig, DEFAULT_ALPHABET, DEFAULT_POLICY
from timecipher.errors import (
    ChecksumMismatchError, CipherError, ConfigurationError, FormatError, LengthMismatchError,
)
from timecipher.pipeline import checksum_report, collision_report, open_sealed, seal
from timecipher.selector import PRESETS, FixedPolicy, capture_context, preset


# =========================
# File glue
# =========================
def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: str, text: str):
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def _strip_line_end(text: str) -> str:
    # only the "\n" cmd_encrypt appends; a "\r" before it belongs to the payload
    return text[:-1] if text.endswith("\n") else text


def _parse_when(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO timestamp: {value!r}") from None


# =========================
# Commands
# =========================
def cmd_encrypt(args) -> int:
    config = CipherConfig.from_args(args).validate()
    context = args.at or capture_context()
    policy = FixedPolicy(config.table) if config.table else preset(config.policy)
    sealed = seal(read_text(args.input), policy, context, config.alphabet, config.codec())
    if args.output:
        write_text(args.output, sealed.encoded + "\n")
        print(f"Policy {policy.name!r} at {context.isoformat(timespec='seconds')} selected table: {sealed.table}")
        print(f"Encoded message written to: {args.output}")
    else:
        print(sealed.encoded)
    return 0


def cmd_decrypt(args) -> int:
    config = CipherConfig.from_args(args).validate()
    encoded = _strip_line_end(read_text(args.input))
    plaintext = open_sealed(encoded, config.table, config.alphabet, config.codec())
    if args.output:
        write_text(args.output, plaintext)
        print(f"Message verified; plaintext written to: {args.output}")
    else:
        print(plaintext)
    return 0


def cmd_report(args) -> int:
    config = CipherConfig.from_args(args).validate()
    report = checksum_report(read_text(args.input), config.alphabet, config.codec())
    print(report.to_string(index=False))
    if args.dump_report_csv:
        report.to_csv(args.dump_report_csv, index=False, encoding="utf-8")
        print(f"Report written to: {args.dump_report_csv}")
    return 0


def cmd_tables(args) -> int:
    names = [args.alphabet] if args.alphabet else DEFAULT_REGISTRY.alphabet_names()
    for name in names:
        alphabet = DEFAULT_REGISTRY.alphabet(name)
        print(f"{name} ({len(alphabet)} characters): {', '.join(DEFAULT_REGISTRY.table_names(name))}")
    collisions = collision_report()
    if args.alphabet:
        collisions = collisions[collisions["alphabet"] == args.alphabet]
    if collisions.empty:
        print("No inverse-map collisions.")
    else:
        print("\n=== Inverse-map collisions (last writer wins) ===")
        print(collisions.to_string(index=False))
    return 0


# =========================
# Built-in smoke checks
# =========================
def _unit_test_abc_scenario():
    print("\n[TEST] ABC -> BCA table, pack and verify…")
    registry = AlphabetRegistry(
        [Alphabet("abc", "ABC")],
        [CipherTable("abc", "rotate", "BCA")],
    )
    sealed = seal("AAB", FixedPolicy("rotate"), capture_context(), "abc", registry=registry)
    assert sealed.encoded == "3|199|BBC", sealed.encoded
    assert open_sealed(sealed.encoded, "rotate", "abc", registry=registry) == "AAB"
    for bad, error in (("4|199|BBC", LengthMismatchError),
                       ("3|0|BBC", ChecksumMismatchError),
                       ("garbage", FormatError)):
        try:
            open_sealed(bad, "rotate", "abc", registry=registry)
        except error:
            continue
        raise AssertionError(f"{bad!r} did not raise {error.__name__}")
    print("[TEST] ok – encode, decode and all three failure kinds behave.")


def _unit_test_shipped_tables():
    print("\n[TEST] round trip through every shipped table…")
    sample = "Hello, Мир! Ёжик 0123456789 |~"
    codec = MessageCodec()
    for alphabet, table in DEFAULT_REGISTRY.pairs():
        sealed = seal(sample, FixedPolicy(table.name), capture_context(), alphabet.name, codec)
        assert open_sealed(sealed.encoded, table.name, alphabet.name, codec) == sample, (alphabet.name, table.name)
    print("[TEST] ok – every table decrypts what it encrypts.")


# =========================
# CLI / main
# =========================
def _add_cipher_options(p, with_table=True, with_policy=False):
    p.add_argument("--input", required=True)
    p.add_argument("--output", default="")
    p.add_argument("--alphabet", default=DEFAULT_ALPHABET, choices=DEFAULT_REGISTRY.alphabet_names())
    if with_policy:
        p.add_argument("--policy", default=DEFAULT_POLICY, choices=list(PRESETS))
        p.add_argument("--at", type=_parse_when, default=None,
                       help="ISO timestamp to select the table for (default: now)")
    if with_table:
        p.add_argument("--table", required=not with_policy, default=None)
    p.add_argument("--checksum-width", type=int, default=DEFAULT_WIDTH)
    p.add_argument("--checksum-mode", choices=list(MODES), default=DEFAULT_MODE)


def build_parser():
    p = argparse.ArgumentParser(
        prog="timecipher",
        description="Substitution cipher with time-selected tables and length/checksum framing.",
    )
    p.add_argument("--run-tests", action="store_true")
    sub = p.add_subparsers(dest="command")

    enc = sub.add_parser("encrypt", help="encrypt a file into a '<length>|<checksum>|<ciphertext>' line")
    _add_cipher_options(enc, with_table=True, with_policy=True)
    enc.set_defaults(func=cmd_encrypt)

    dec = sub.add_parser("decrypt", help="verify and decrypt an encoded message")
    _add_cipher_options(dec, with_table=True)
    dec.set_defaults(func=cmd_decrypt)

    rep = sub.add_parser("report", help="encrypt with every table and list checksums")
    _add_cipher_options(rep, with_table=False)
    rep.add_argument("--dump-report-csv", default="")
    rep.set_defaults(func=cmd_report)

    tab = sub.add_parser("tables", help="list alphabets, tables and inverse collisions")
    tab.add_argument("--alphabet", default=None, choices=DEFAULT_REGISTRY.alphabet_names())
    tab.set_defaults(func=cmd_tables)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.run_tests:
        _unit_test_abc_scenario()
        _unit_test_shipped_tables()
        return 0
    if not getattr(args, "func", None):
        parser.print_help()
        return 2
    try:
        return args.func(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except CipherError as e:
        print(f"Rejected: {e}", file=sys.stderr)
        return 2
    except UnicodeDecodeError as e:
        print(f"Input is not valid UTF-8: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())

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


from dataclasses import dataclass
from typing import Optional

from timecipher.checksum import DEFAULT_MODE, DEFAULT_WIDTH, validate
from timecipher.alphabets import DEFAULT_REGISTRY
from timecipher.codec import DELIMITER, MessageCodec
from timecipher.errors import ConfigurationError
from timecipher.selector import PRESETS

# === Parameters (default) ===
DEFAULT_ALPHABET = "full"
DEFAULT_POLICY = "hour"      # see selector.PRESETS
CHECKSUM_WIDTH = DEFAULT_WIDTH
CHECKSUM_MODE = DEFAULT_MODE


@dataclass
class CipherConfig:
    alphabet: str = DEFAULT_ALPHABET
    policy: str = DEFAULT_POLICY
    table: Optional[str] = None  # overrides the policy when set
    checksum_width: int = CHECKSUM_WIDTH
    checksum_mode: str = CHECKSUM_MODE
    delimiter: str = DELIMITER

    @classmethod
    def from_args(cls, args) -> "CipherConfig":
        defaults = cls()
        width = getattr(args, "checksum_width", None)
        return cls(
            alphabet=getattr(args, "alphabet", None) or defaults.alphabet,
            policy=getattr(args, "policy", None) or defaults.policy,
            table=getattr(args, "table", None),
            checksum_width=defaults.checksum_width if width is None else width,
            checksum_mode=getattr(args, "checksum_mode", None) or defaults.checksum_mode,
        )

    def validate(self) -> "CipherConfig":
        DEFAULT_REGISTRY.alphabet(self.alphabet)
        if self.table is not None:
            DEFAULT_REGISTRY.table(self.alphabet, self.table)
        elif self.policy not in PRESETS:
            raise ConfigurationError(
                f"Unknown selection policy {self.policy!r} (known: {', '.join(PRESETS)})"
            )
        validate(self.checksum_width, self.checksum_mode)
        return self

    def codec(self) -> MessageCodec:
        return MessageCodec(self.checksum_width, self.checksum_mode, self.delimiter)

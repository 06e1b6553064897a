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
Cipher selection policies.

A policy maps a point in time to a table name through decide(context). The
context is always passed in; nothing here reads the clock except
capture_context(), which callers use once per batch.
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from timecipher.errors import ConfigurationError

Context = datetime
Predicate = Callable[[Context], bool]

FORWARD_SHIFT = "forward-shift"
REVERSE_ORDER = "reverse-order"
REVERSE_ORDER_ALT = "reverse-order-alt"


def capture_context(clock: Optional[Callable[[], datetime]] = None) -> Context:
    return (clock or datetime.now)()


# === Predicates ===
def is_even_hour(context: Context) -> bool:
    return context.hour % 2 == 0


def is_even_minute(context: Context) -> bool:
    return context.minute % 2 == 0


def is_even_month(context: Context) -> bool:
    # calendar month, 1..12
    return context.month % 2 == 0


def is_weekend(context: Context) -> bool:
    return context.weekday() >= 5


# === Policies ===
class Policy:
    name = "policy"

    def decide(self, context: Context) -> str:
        raise NotImplementedError


class FixedPolicy(Policy):
    name = "fixed"

    def __init__(self, table: str):
        self.table = table

    def __repr__(self):
        return f"FixedPolicy({self.table!r})"

    def decide(self, context: Context) -> str:
        return self.table


class ConditionPolicy(Policy):
    """`when_true` if the predicate holds for the context, else `when_false`."""

    predicate: Predicate = staticmethod(lambda context: True)

    def __init__(self, when_true: str, when_false: str):
        self.when_true = when_true
        self.when_false = when_false

    def __repr__(self):
        return f"{type(self).__name__}({self.when_true!r}, {self.when_false!r})"

    def decide(self, context: Context) -> str:
        return self.when_true if self.predicate(context) else self.when_false


class HourParityPolicy(ConditionPolicy):
    name = "hour"
    predicate = staticmethod(is_even_hour)


class MinuteParityPolicy(ConditionPolicy):
    name = "minute"
    predicate = staticmethod(is_even_minute)


class MonthParityPolicy(ConditionPolicy):
    name = "month"
    predicate = staticmethod(is_even_month)


class WeekdayPolicy(ConditionPolicy):
    """Saturday and Sunday pick `when_true`, Monday to Friday `when_false`."""

    name = "weekday"
    predicate = staticmethod(is_weekend)


class CompositePolicy(Policy):
    """
    Ordered rules, evaluated top to bottom; the first predicate that holds picks
    its table. `default` is used when none match.
    """

    name = "composite"

    def __init__(self, rules: Sequence[Tuple[Predicate, str]], default: str):
        self.rules: List[Tuple[Predicate, str]] = list(rules)
        self.default = default

    def __repr__(self):
        names = ", ".join(f"{getattr(p, '__name__', p)}->{t}" for p, t in self.rules)
        return f"CompositePolicy([{names}], default={self.default!r})"

    def decide(self, context: Context) -> str:
        for predicate, table in self.rules:
            if predicate(context):
                return table
        return self.default


def select(policy: Policy, context: Context) -> str:
    return policy.decide(context)


# === Presets ===
PRESETS: Dict[str, Callable[[], Policy]] = {
    "hour": lambda: HourParityPolicy(REVERSE_ORDER, REVERSE_ORDER_ALT),
    "weekday": lambda: WeekdayPolicy(REVERSE_ORDER, FORWARD_SHIFT),
    "month": lambda: MonthParityPolicy(REVERSE_ORDER_ALT, FORWARD_SHIFT),
    "minute": lambda: MinuteParityPolicy(FORWARD_SHIFT, REVERSE_ORDER),
    "calendar": lambda: CompositePolicy(
        [(is_weekend, REVERSE_ORDER), (is_even_month, REVERSE_ORDER_ALT)],
        default=FORWARD_SHIFT,
    ),
    "fixed": lambda: FixedPolicy(FORWARD_SHIFT),
}


def preset(name: str) -> Policy:
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown selection policy {name!r} (known: {', '.join(PRESETS)})"
        ) from None
    return factory()

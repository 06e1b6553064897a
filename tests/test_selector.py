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

from timecipher.errors import ConfigurationError
from timecipher.selector import (
    PRESETS,
    CompositePolicy,
    FixedPolicy,
    HourParityPolicy,
    MinuteParityPolicy,
    MonthParityPolicy,
    WeekdayPolicy,
    capture_context,
    is_even_month,
    is_weekend,
    preset,
    select,
)

SATURDAY = datetime(2026, 10, 17, 9, 30)
SUNDAY = datetime(2026, 10, 18, 9, 30)
MONDAY = datetime(2026, 10, 19, 14, 0)
FRIDAY = datetime(2026, 10, 23, 15, 1)


def test_hour_parity():
    policy = HourParityPolicy("A", "B")
    assert select(policy, datetime(2026, 1, 1, 14)) == "A"
    assert select(policy, datetime(2026, 1, 1, 15)) == "B"
    assert select(policy, datetime(2026, 1, 1, 0)) == "A"


def test_selection_is_reproducible():
    policy = HourParityPolicy("A", "B")
    context = datetime(2026, 1, 1, 14, 59, 59)
    assert [select(policy, context) for _ in range(5)] == ["A"] * 5


def test_weekday():
    policy = WeekdayPolicy("A", "B")
    assert select(policy, SATURDAY) == "A"
    assert select(policy, SUNDAY) == "A"
    assert select(policy, MONDAY) == "B"
    assert select(policy, FRIDAY) == "B"


def test_month_parity_uses_calendar_month():
    policy = MonthParityPolicy("A", "B")
    assert select(policy, datetime(2026, 2, 1)) == "A"
    assert select(policy, datetime(2026, 12, 1)) == "A"
    assert select(policy, datetime(2026, 1, 1)) == "B"
    assert select(policy, datetime(2026, 11, 30)) == "B"


def test_minute_parity():
    policy = MinuteParityPolicy("A", "B")
    assert select(policy, datetime(2026, 1, 1, 3, 58)) == "A"
    assert select(policy, datetime(2026, 1, 1, 3, 59)) == "B"


def test_fixed():
    assert select(FixedPolicy("T"), MONDAY) == "T"
    assert select(FixedPolicy("T"), SATURDAY) == "T"


def test_composite_first_match_wins():
    policy = CompositePolicy([(is_weekend, "weekend"), (is_even_month, "even")], default="other")
    assert select(policy, SATURDAY) == "weekend"  # October, weekend rule first
    assert select(policy, datetime(2026, 11, 14)) == "weekend"  # Saturday in an odd month
    assert select(policy, datetime(2026, 10, 20)) == "even"
    assert select(policy, datetime(2026, 3, 4)) == "other"


def test_composite_without_rules_uses_default():
    assert select(CompositePolicy([], default="d"), MONDAY) == "d"


def test_presets():
    assert set(PRESETS) == {"hour", "weekday", "month", "minute", "calendar", "fixed"}
    assert select(preset("hour"), MONDAY) == "reverse-order"
    assert select(preset("hour"), FRIDAY) == "reverse-order-alt"
    assert select(preset("weekday"), SUNDAY) == "reverse-order"
    assert select(preset("weekday"), MONDAY) == "forward-shift"
    assert select(preset("month"), MONDAY) == "reverse-order-alt"
    assert select(preset("month"), datetime(2026, 11, 2)) == "forward-shift"
    assert select(preset("minute"), MONDAY) == "forward-shift"
    assert select(preset("minute"), FRIDAY) == "reverse-order"
    assert select(preset("calendar"), SATURDAY) == "reverse-order"
    assert select(preset("calendar"), MONDAY) == "reverse-order-alt"
    assert select(preset("calendar"), datetime(2026, 3, 4)) == "forward-shift"
    assert select(preset("fixed"), MONDAY) == "forward-shift"


def test_presets_are_fresh_instances():
    assert preset("hour") is not preset("hour")


def test_unknown_preset():
    with pytest.raises(ConfigurationError, match="known: hour"):
        preset("sunrise")


def test_capture_context_uses_injected_clock():
    assert capture_context(lambda: MONDAY) == MONDAY
    assert isinstance(capture_context(), datetime)

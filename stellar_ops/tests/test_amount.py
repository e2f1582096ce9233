from decimal import Decimal

import pytest

from stellar_ops.amount import ONE, from_stroops, to_stroops
from stellar_ops.validation import InvalidAmount


def test_to_stroops():
    assert to_stroops("1") == ONE
    assert to_stroops("12.5") == 125_000_000
    assert to_stroops("0.0000001") == 1
    assert to_stroops(Decimal("922337203685.4775807")) == 2**63 - 1


@pytest.mark.parametrize("value", ["0.00000001", "-1", "abc", "NaN", "922337203685.4775808", 1.5])
def test_to_stroops_rejects(value):
    with pytest.raises(InvalidAmount):
        to_stroops(value)


def test_from_stroops():
    assert from_stroops(ONE) == "1"
    assert from_stroops(125_000_000) == "12.5"
    assert from_stroops(1) == "0.0000001"
    assert from_stroops(0) == "0"
    with pytest.raises(InvalidAmount):
        from_stroops(-1)

from __future__ import annotations

import pytest

from qdcompass.adaptation.compass.portfolio import OperatorArm, OperatorSet
from qdcompass.adaptation.compass.selector import CompassSelector
from qdcompass.foundation.exceptions import ConfigurationError


def pm_mutation():
    return None


def test_from_operators_derives_ids(make_operators) -> None:
    first, second = make_operators("swap", "swap")
    ops = OperatorSet.from_operators([first, pm_mutation, second])
    assert ops.ids() == ["swap", "pm_mutation", "swap#2"]
    assert ops.names() == ["swap", "pm_mutation", "swap"]
    assert ops.by_id("swap").operator is first
    assert ops.index_of("swap#2") == 2


def test_from_operators_skips_ids_taken_by_earlier_names(make_operators) -> None:
    operators = make_operators("a", "a#2", "a")
    ops = OperatorSet.from_operators(operators)
    assert ops.ids() == ["a", "a#2", "a#3"]
    assert ops.names() == ["a", "a#2", "a"]
    assert ops.by_id("a#3").operator is operators[2]

    selector = CompassSelector(operators)
    assert selector.operators.ids() == ["a", "a#2", "a#3"]


def test_from_pairs_keeps_order_and_references() -> None:
    a, b = object(), object()
    ops = OperatorSet.from_pairs([("a", a), ("b", b)])
    assert len(ops) == 2
    assert ops.operators()[0] is a
    assert ops[1].operator is b
    assert [arm.op_id for arm in ops] == ["a", "b"]


def test_operator_set_validation() -> None:
    with pytest.raises(ConfigurationError):
        OperatorSet.from_pairs([("a", object())])
    with pytest.raises(ConfigurationError):
        OperatorSet.from_pairs([("a", object()), ("a", object())])
    with pytest.raises(ConfigurationError):
        OperatorSet([OperatorArm("", "x", 1), OperatorArm("y", "y", 2)])

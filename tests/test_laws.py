"""Tests for relalg.laws: law checking over finite test grids."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from relalg.carriers import ANY, NAT, STRING
from relalg.errors import InvalidConstruction
from relalg.examples import ALL_EXAMPLES
from relalg.helpers import pred_rel, rel, sv
from relalg.laws import (
    LAWS,
    Severity,
    agrees_with,
    check_complete,
    check_empty,
    check_laws,
)
from relalg.relation import PredicateRelation, Relation, complete, empty
from relalg.setview import SetView


class BrokenInverse(PredicateRelation[Any, Any]):
    """A relation whose inverse is wrong, to exercise the checker."""

    def inverse(self) -> Relation[Any, Any]:
        return pred_rel(lambda b, a: False, ANY, ANY, inputs=self.outputs, outputs=self.inputs)


def test_finite_relation_satisfies_all_laws() -> None:
    r = rel([("Mary", 1), ("Mary", 2), ("Lu", 3)])
    result = check_laws(r, sv("Mary", "Lu", "Bob"), sv(1, 2, 3, 4))
    assert result.holds
    assert result.laws_checked == tuple(LAWS)
    assert result.input_count == 3
    assert result.output_count == 4


def test_predicate_relation_satisfies_all_laws() -> None:
    r = pred_rel(lambda s, n: len(s) == n, STRING, NAT)
    result = check_laws(r, sv("Hello", "Lean", "!", ""), sv(*range(6)))
    assert result.holds, result.diagnostics


@pytest.mark.parametrize("factory", ALL_EXAMPLES)
def test_examples_satisfy_laws(factory) -> None:
    result = check_laws(factory())
    assert result.holds, result.errors


def test_broken_inverse_is_reported(caplog: pytest.LogCaptureFixture) -> None:
    r = BrokenInverse(lambda a, b: a == b, inputs=sv(1, 2), outputs=sv(1, 2))
    with caplog.at_level(logging.WARNING, logger="relalg.laws"):
        result = check_laws(r)
    assert not result.holds
    assert "inverse_membership" in result.failed_laws
    assert "domain_range" in result.failed_laws
    assert any(d.witness == (1, 1) for d in result.errors)
    assert any("violates" in rec.message for rec in caplog.records)


def test_selected_laws_only() -> None:
    r = rel([("a", 1)])
    result = check_laws(r, laws=["involution"])
    assert result.laws_checked == ("involution",)


def test_unknown_law() -> None:
    with pytest.raises(ValueError, match="Unknown laws"):
        check_laws(rel([("a", 1)]), laws=["associativity"])


def test_missing_candidates_raise() -> None:
    with pytest.raises(InvalidConstruction):
        check_laws(pred_rel(lambda s, n: len(s) == n, STRING, NAT))


def test_empty_relation_warns_but_holds() -> None:
    result = check_laws(empty(), sv("a"), sv(1))
    assert result.holds
    assert [d.severity for d in result.warnings] == [Severity.WARNING]


def test_check_empty() -> None:
    assert check_empty(empty(), sv("a", "b"), sv(1, 2)).holds
    bad = check_empty(rel([("a", 1)]), sv("a"), sv(1))
    assert not bad.holds
    assert bad.failed_laws == ("empty",)


def test_check_complete() -> None:
    hint_in = sv("a", "b")
    hint_out = sv(1, 2)
    assert check_complete(complete(hint_in, hint_out), hint_in, hint_out).holds
    partial = rel([("a", 1), ("a", 2), ("b", 1)])
    result = check_complete(partial, hint_in, hint_out)
    assert [d.witness for d in result.errors] == [("b", 2)]


def test_agrees_with() -> None:
    finite = rel([("ab", 2), ("", 0)])
    strlen = pred_rel(lambda s, n: len(s) == n)
    assert agrees_with(finite, strlen, sv("ab", ""), sv(0, 1, 2)).holds
    result = agrees_with(finite, strlen, sv("abc"), sv(3))
    assert not result.holds
    assert result.errors[0].witness == ("abc", 3)


def test_law_result_properties() -> None:
    result = check_laws(rel([("a", 1)]), sv("a"), sv(1))
    assert result.relation_name == "FiniteRelation"
    assert result.errors == ()
    assert result.failed_laws == ()
    assert isinstance(result.diagnostics, tuple)
    assert SetView.of(*result.laws_checked) == SetView.from_iterable(LAWS)

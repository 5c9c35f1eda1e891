"""Round-trip tests for serialization of finite relations."""

import json
from fractions import Fraction

import pytest

from relalg import NAT, STRING, carrier, dumps, equivalent, loads, rel, sv
from relalg.examples import ACCOUNT, PERSON, accts_of_rel, strlen_rel, unit_circle_rel
from relalg.serialization import (
    carrier_from_json,
    carrier_to_json,
    setview_from_json,
    setview_to_json,
    value_from_json,
    value_to_json,
)


def test_accts_of_round_trip() -> None:
    r = accts_of_rel()
    restored = loads(dumps(r))
    assert restored.name == "acctsOf"
    assert restored.pairs() == r.pairs()
    assert restored.source.admits("Bob")
    assert not restored.source.admits("Eve")
    assert equivalent(r, restored, PERSON.elements, ACCOUNT.elements)


def test_stock_carriers_keep_constraints() -> None:
    restored = carrier_from_json(carrier_to_json(NAT))
    assert restored is NAT
    assert not restored.admits(-1)


def test_pairs_are_written_in_order() -> None:
    d = json.loads(dumps(accts_of_rel()))
    assert d["type"] == "finite_relation"
    assert d["pairs"] == [["Lu", 3], ["Mary", 1], ["Mary", 2]]


def test_fraction_values() -> None:
    r = unit_circle_rel().materialize()
    restored = loads(dumps(r))
    assert restored.contains(Fraction(3, 5), Fraction(-4, 5))
    assert restored.pairs() == r.pairs()


def test_structured_values() -> None:
    v = (1, Fraction(1, 2), ("a", None), frozenset({True}))
    assert value_from_json(value_to_json(v)) == v


def test_setview_round_trip() -> None:
    s = sv("Hello", "Lean")
    assert setview_from_json(setview_to_json(s)) == s


def test_predicate_relation_not_serializable() -> None:
    with pytest.raises(TypeError, match="materialize"):
        dumps(strlen_rel())


def test_unknown_value_type() -> None:
    with pytest.raises(TypeError):
        value_to_json(object())
    with pytest.raises(ValueError):
        value_from_json({"type": "complex", "value": "1j"})


def test_unknown_carrier_type() -> None:
    with pytest.raises(ValueError, match="Unknown carrier type"):
        carrier_from_json({"type": "carrier", "name": "X", "types": ["bytes"], "elements": None})


def test_custom_carrier_round_trip() -> None:
    restored = carrier_from_json(carrier_to_json(STRING.finite(["x"])))
    assert restored.name == "String"
    assert restored.admits("x")
    assert not restored.admits("y")


def test_custom_constraint_not_serializable() -> None:
    even = carrier("Even", int, where=lambda n: n % 2 == 0)
    r = rel([(2, 4)], even, even)
    with pytest.raises(TypeError, match="custom constraint"):
        dumps(r)


def test_stock_constraint_with_finite_restriction() -> None:
    small = NAT.finite(range(3))
    restored = loads(dumps(rel([(0, 1)], small, small)))
    assert not restored.source.admits(-1)
    assert restored.source.admits(2)
    assert not restored.source.admits(3)

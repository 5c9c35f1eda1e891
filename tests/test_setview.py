from fractions import Fraction

from relalg.setview import EMPTY, SetView


def test_duplicates_collapse() -> None:
    s = SetView.of(1, 2, 2, 3)
    assert len(s) == 3
    assert s == SetView.of(3, 2, 1)


def test_equality_ignores_construction_order() -> None:
    assert SetView.from_iterable(["b", "a"]) == SetView.from_iterable(("a", "b"))


def test_from_iterable_returns_same_view() -> None:
    s = SetView.of(1)
    assert SetView.from_iterable(s) is s


def test_set_algebra() -> None:
    a = SetView.of(1, 2, 3)
    b = SetView.of(3, 4)
    assert a | b == SetView.of(1, 2, 3, 4)
    assert a & b == SetView.of(3)
    assert a - b == SetView.of(1, 2)
    assert SetView.of(1, 2).issubset(a)
    assert a.issuperset(SetView.of(3))


def test_empty_is_falsy() -> None:
    assert not EMPTY
    assert SetView.of(0)
    assert repr(EMPTY) == "∅"


def test_repr_is_sorted() -> None:
    assert repr(SetView.of(3, 1, 2)) == "{1, 2, 3}"
    assert repr(SetView.of(Fraction(1, 2), 0)) == "{0, Fraction(1, 2)}"


def test_sorted_items_mixed_types() -> None:
    items = SetView.of("x", 1).sorted_items()
    assert items == [1, "x"]


def test_hashable() -> None:
    assert len({SetView.of(1, 2), SetView.of(2, 1)}) == 1

"""Builder helpers for constructing relations.

These are the primary public API for writing relations. Relation files
loaded by the CLI should use these rather than constructing the
dataclasses directly.
"""

from collections.abc import Callable, Iterable
from typing import Any

from relalg.carriers import ANY, Carrier
from relalg.relation import FiniteRelation, PredicateRelation
from relalg.setview import SetView


def sv(*items: Any) -> SetView[Any]:
    return SetView.of(*items)


def carrier(
    name: str,
    *types: type,
    elements: Iterable[Any] | None = None,
    where: Callable[[Any], bool] | None = None,
) -> Carrier:
    """A carrier admitting *types* (default: anything), optionally finite."""
    c = Carrier(name=name, types=types or (object,), constraint=where)
    return c if elements is None else c.finite(elements)


def rel(
    pairs: Iterable[tuple[Any, Any]],
    source: Carrier = ANY,
    target: Carrier = ANY,
    name: str = "",
) -> FiniteRelation[Any, Any]:
    return FiniteRelation(tuple(pairs), source=source, target=target, name=name)  # type: ignore[arg-type]


def pred_rel(
    test: Callable[[Any, Any], bool],
    source: Carrier = ANY,
    target: Carrier = ANY,
    *,
    inputs: Iterable[Any] | None = None,
    outputs: Iterable[Any] | None = None,
    name: str = "",
    memoize: bool = False,
) -> PredicateRelation[Any, Any]:
    return PredicateRelation(
        test,
        source=source,
        target=target,
        inputs=None if inputs is None else SetView.from_iterable(inputs),
        outputs=None if outputs is None else SetView.from_iterable(outputs),
        name=name,
        memoize=memoize,
    )

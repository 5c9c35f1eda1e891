"""JSON serialization for carriers, set views and finite relations.

Every structured value serializes to a dict with a "type" discriminator
field. Round-trip: from_json(to_json(x)) is extensionally equal to x.

Predicate relations hold arbitrary Python callables and cannot be
serialized; materialize them over a finite grid first. For the same
reason a carrier is only serializable when its constraint, if any, is the
one of the stock carrier with the same name.
"""

from __future__ import annotations

import json
from fractions import Fraction
from typing import Any

from .carriers import ANY, BOOL, INT, NAT, RAT, STRING, Carrier
from .relation import FiniteRelation, Relation
from .setview import SetView

_STOCK_CARRIERS = {c.name: c for c in (ANY, STRING, INT, NAT, RAT, BOOL)}
_TYPES_BY_NAME: dict[str, type] = {
    "object": object,
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "Fraction": Fraction,
}


# ---------------------------------------------------------------------------
# Element values
# ---------------------------------------------------------------------------


def value_to_json(v: Any) -> Any:
    if v is None or isinstance(v, (str, bool, int, float)):
        return v
    if isinstance(v, Fraction):
        return {"type": "fraction", "value": str(v)}
    if isinstance(v, tuple):
        return {"type": "tuple", "items": [value_to_json(x) for x in v]}
    if isinstance(v, frozenset):
        return {"type": "frozenset", "items": [value_to_json(x) for x in _ordered(v)]}
    raise TypeError(f"Cannot serialize element of type {type(v).__name__}: {v!r}")


def value_from_json(d: Any) -> Any:
    if not isinstance(d, dict):
        return d
    t = d["type"]
    if t == "fraction":
        return Fraction(d["value"])
    elif t == "tuple":
        return tuple(value_from_json(x) for x in d["items"])
    elif t == "frozenset":
        return frozenset(value_from_json(x) for x in d["items"])
    raise ValueError(f"Unknown value type: {t}")


def _ordered(items: frozenset[Any]) -> list[Any]:
    return SetView(items).sorted_items()


# ---------------------------------------------------------------------------
# Set views and carriers
# ---------------------------------------------------------------------------


def setview_to_json(s: SetView[Any]) -> dict[str, Any]:
    return {"type": "set", "items": [value_to_json(x) for x in s.sorted_items()]}


def setview_from_json(d: dict[str, Any]) -> SetView[Any]:
    if d["type"] != "set":
        raise ValueError(f"Expected set, got {d['type']}")
    return SetView(frozenset(value_from_json(x) for x in d["items"]))


def carrier_to_json(c: Carrier) -> dict[str, Any]:
    stock = _STOCK_CARRIERS.get(c.name)
    if c.constraint is not None and (stock is None or c.constraint is not stock.constraint):
        raise TypeError(
            f"Carrier {c.name} has a custom constraint and cannot be serialized"
        )
    return {
        "type": "carrier",
        "name": c.name,
        "types": [t.__name__ for t in c.types],
        "elements": None if c.elements is None else setview_to_json(c.elements),
    }


def carrier_from_json(d: dict[str, Any]) -> Carrier:
    if d["type"] != "carrier":
        raise ValueError(f"Expected carrier, got {d['type']}")
    try:
        types = tuple(_TYPES_BY_NAME[n] for n in d["types"])
    except KeyError as e:
        raise ValueError(f"Unknown carrier type: {e.args[0]}") from e
    stock = _STOCK_CARRIERS.get(d["name"])
    base = stock if stock is not None and stock.types == types else Carrier(d["name"], types)
    elements = d.get("elements")
    if elements is None:
        return base
    return base.finite(setview_from_json(elements))


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------


def relation_to_json(r: Relation[Any, Any]) -> dict[str, Any]:
    if not isinstance(r, FiniteRelation):
        raise TypeError(
            f"Only finite relations can be serialized, got {type(r).__name__}; "
            "materialize it over a finite grid first"
        )
    return {
        "type": "finite_relation",
        "name": r.name,
        "source": carrier_to_json(r.source),
        "target": carrier_to_json(r.target),
        "pairs": [
            [value_to_json(a), value_to_json(b)]
            for a, b in SetView(r.members).sorted_items()
        ],
    }


def relation_from_json(d: dict[str, Any]) -> FiniteRelation[Any, Any]:
    if d["type"] != "finite_relation":
        raise ValueError(f"Unknown relation type: {d['type']}")
    pairs = tuple(
        (value_from_json(a), value_from_json(b)) for a, b in d["pairs"]
    )
    return FiniteRelation(
        frozenset(pairs),
        source=carrier_from_json(d["source"]),
        target=carrier_from_json(d["target"]),
        name=d.get("name", ""),
    )


# ---------------------------------------------------------------------------
# Top-level convenience
# ---------------------------------------------------------------------------


def dumps(r: Relation[Any, Any], indent: int = 2) -> str:
    return json.dumps(relation_to_json(r), indent=indent, ensure_ascii=False)


def loads(s: str) -> FiniteRelation[Any, Any]:
    return relation_from_json(json.loads(s))

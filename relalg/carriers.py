"""Carriers: the sets a relation relates.

A carrier is a name for a set of values. It is what a type is in the
mathematical presentation: the *domain of definition* of a relation is
its source carrier, the *codomain* is its target carrier.

A carrier admits a value when the value is an instance of one of the
carrier's Python types and passes its optional constraint. Carriers may
also carry a finite enumeration of their elements; relations fall back
on it when a query needs to enumerate candidates and the caller supplied
none.

Examples:
    STRING   any ``str``
    NAT      ``int`` values >= 0 (``bool`` excluded)
    RAT      ``Fraction`` or ``int`` values
"""

from __future__ import annotations

import json
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from fractions import Fraction
from typing import Any

from .errors import TypeMismatch
from .setview import SetView


@dataclass(frozen=True)
class Carrier:
    """A named set of values, checked by Python type plus an optional constraint.

    Example:
        Color = Carrier("Color", (str,), elements=SetView.of("red", "green"))
    """

    name: str
    types: tuple[type, ...] = (object,)
    constraint: Callable[[Any], bool] | None = None
    elements: SetView[Any] | None = None

    def admits(self, value: object) -> bool:
        if not isinstance(value, self.types):
            return False
        # bool is an int subclass; it only belongs where declared explicitly
        if isinstance(value, bool) and bool not in self.types and object not in self.types:
            return False
        if self.elements is not None:
            if not isinstance(value, Hashable) or value not in self.elements:
                return False
        if self.constraint is not None and not self.constraint(value):
            return False
        return True

    def require(self, value: object, role: str = "value") -> None:
        """Raise :class:`TypeMismatch` unless *value* belongs to this carrier."""
        if not self.admits(value):
            raise TypeMismatch(
                f"{role} {value!r} ({type(value).__name__}) is not an element of {self.name}"
            )

    def require_all(self, values: Iterable[object], role: str = "value") -> None:
        for v in values:
            self.require(v, role)

    def compatible(self, other: Carrier) -> bool:
        """Same kind of values, ignoring finite restrictions and constraints."""
        if ANY in (self, other):
            return True
        return self.name == other.name and self.types == other.types

    @property
    def is_finite(self) -> bool:
        return self.elements is not None

    def parse(self, text: str) -> Any:
        """Parse command-line text into an element of this carrier.

        The first declared type with a known textual form wins; ``object``
        carriers accept JSON scalars and fall back to the raw string.
        """
        for t in self.types:
            value = _parse_as(t, text)
            if value is not _NO_PARSE:
                self.require(value)
                return value
        raise TypeMismatch(f"cannot parse {text!r} as an element of {self.name}")

    def finite(self, elements: Iterable[Any]) -> Carrier:
        """The same carrier restricted to an explicit finite enumeration."""
        view = SetView.from_iterable(elements)
        self.require_all(view)
        return Carrier(
            name=self.name,
            types=self.types,
            constraint=self.constraint,
            elements=view,
        )


_NO_PARSE = object()


def _parse_as(t: type, text: str) -> Any:
    try:
        if t is str:
            return text
        if t is bool:
            lowered = text.strip().lower()
            if lowered in ("true", "1", "yes"):
                return True
            if lowered in ("false", "0", "no"):
                return False
            return _NO_PARSE
        if t is int:
            return int(text)
        if t is float:
            return float(text)
        if t is Fraction:
            return Fraction(text)
        if t is object:
            try:
                return json.loads(text)
            except json.JSONDecodeError:
                return text
    except ValueError:
        return _NO_PARSE
    return _NO_PARSE


# ---------------------------------------------------------------------------
# Stock carriers
# ---------------------------------------------------------------------------

ANY = Carrier("Any")
STRING = Carrier("String", (str,))
INT = Carrier("Int", (int,))
NAT = Carrier("Nat", (int,), constraint=lambda n: n >= 0)
RAT = Carrier("Rat", (Fraction, int))
BOOL = Carrier("Bool", (bool,), elements=SetView.of(False, True))

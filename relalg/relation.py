"""Binary relations between two carriers.

A relation R from A to B is a set of ordered pairs (a, b) with a ∈ A and
b ∈ B. Two representations are provided:

  FiniteRelation:     an explicit set of pairs, indexed in both directions
  PredicateRelation:  a boolean test ``test(a, b)``, enumerated only over
                      finite candidate sets

Every query is pure and returns a new SetView or Relation; relations never
change after construction.

Candidate sets. A predicate relation may relate infinitely many values
(``len(s) == n`` over all strings), so enumerating queries such as
``domain`` only ever look at the candidates they are given, or at the
relation's declared defaults. A candidate set that does not bound the
true domain of the relation yields an under-approximation: that is the
caller's contract, not an error. Only the complete absence of candidates
is an error (:class:`InvalidConstruction`).

Relations are compared extensionally with :func:`equivalent`, never with
``==`` (which is identity).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Generic, TypeVar

from .carriers import ANY, Carrier
from .errors import InvalidConstruction, TypeMismatch
from .setview import EMPTY, SetView

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")

Pair = tuple[A, B]


# ---------------------------------------------------------------------------
# Common query surface
# ---------------------------------------------------------------------------


class Relation(ABC, Generic[A, B]):
    """A binary relation from ``source`` to ``target``."""

    source: Carrier
    target: Carrier
    name: str

    @abstractmethod
    def contains(self, a: A, b: B) -> bool:
        """True iff (a, b) is a member of the relation."""

    @abstractmethod
    def inverse(self) -> Relation[B, A]:
        """The relation with input and output roles swapped.

        ``r.inverse().inverse()`` returns ``r`` itself.
        """

    @abstractmethod
    def default_inputs(self) -> SetView[A] | None:
        """Inputs enumerated when a query is given no candidate inputs."""

    @abstractmethod
    def default_outputs(self) -> SetView[B] | None:
        """Outputs enumerated when a query is given no candidate outputs."""

    @property
    def label(self) -> str:
        return self.name or type(self).__name__

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return self.contains(pair[0], pair[1])

    # -- candidate resolution ------------------------------------------------

    def resolve_inputs(self, candidates: Iterable[A] | None, op: str) -> SetView[A]:
        if candidates is not None:
            return SetView.from_iterable(candidates)
        default = self.default_inputs()
        if default is None:
            raise InvalidConstruction(
                f"{op} on {self.label} needs candidate inputs: "
                f"none were given and carrier {self.source.name} is not finite"
            )
        return default

    def resolve_outputs(self, candidates: Iterable[B] | None, op: str) -> SetView[B]:
        if candidates is not None:
            return SetView.from_iterable(candidates)
        default = self.default_outputs()
        if default is None:
            raise InvalidConstruction(
                f"{op} on {self.label} needs candidate outputs: "
                f"none were given and carrier {self.target.name} is not finite"
            )
        return default

    # -- set-valued queries --------------------------------------------------

    def domain(
        self, candidates: Iterable[A] | None = None, *, outputs: Iterable[B] | None = None
    ) -> SetView[A]:
        """{ a ∈ candidates | ∃ b. contains(a, b) }"""
        ins = self.resolve_inputs(candidates, "domain")
        outs = self.resolve_outputs(outputs, "domain")
        _warn_if_empty(self, ins, "domain", "inputs")
        result = SetView(
            frozenset(a for a in ins if any(self.contains(a, b) for b in outs))
        )
        logger.debug(
            "domain(%s): %d of %d candidates related", self.label, len(result), len(ins)
        )
        return result

    def range(
        self, candidates: Iterable[B] | None = None, *, inputs: Iterable[A] | None = None
    ) -> SetView[B]:
        """{ b ∈ candidates | ∃ a. contains(a, b) }"""
        outs = self.resolve_outputs(candidates, "range")
        ins = self.resolve_inputs(inputs, "range")
        return self.inverse().domain(outs, outputs=ins)

    def image(self, s: Iterable[A], *, outputs: Iterable[B] | None = None) -> SetView[B]:
        """{ b | ∃ a ∈ s. contains(a, b) }"""
        s = SetView.from_iterable(s)
        if not s:
            return EMPTY
        outs = self.resolve_outputs(outputs, "image")
        result = SetView(
            frozenset(b for b in outs if any(self.contains(a, b) for a in s))
        )
        logger.debug(
            "image(%s): %d inputs reach %d outputs", self.label, len(s), len(result)
        )
        return result

    def preimage(self, t: Iterable[B], *, inputs: Iterable[A] | None = None) -> SetView[A]:
        """{ a | ∃ b ∈ t. contains(a, b) }, i.e. the image of t under the inverse."""
        t = SetView.from_iterable(t)
        if not t:
            return EMPTY
        ins = self.resolve_inputs(inputs, "preimage")
        return self.inverse().image(t, outputs=ins)

    def pairs(
        self, inputs: Iterable[A] | None = None, outputs: Iterable[B] | None = None
    ) -> SetView[Pair[A, B]]:
        """Every member (a, b) over the candidate grid."""
        ins = self.resolve_inputs(inputs, "pairs")
        outs = self.resolve_outputs(outputs, "pairs")
        return SetView(
            frozenset((a, b) for a in ins for b in outs if self.contains(a, b))
        )

    def materialize(
        self, inputs: Iterable[A] | None = None, outputs: Iterable[B] | None = None
    ) -> FiniteRelation[A, B]:
        """An explicit-pair copy of this relation over the candidate grid."""
        return FiniteRelation(
            self.pairs(inputs, outputs).items,
            source=self.source,
            target=self.target,
            name=self.name,
        )

    # -- properties ----------------------------------------------------------

    def is_total(
        self, inputs: Iterable[A] | None = None, *, outputs: Iterable[B] | None = None
    ) -> bool:
        """Every candidate input relates to at least one output."""
        ins = self.resolve_inputs(inputs, "is_total")
        return self.domain(ins, outputs=outputs) == ins

    def is_single_valued(
        self, inputs: Iterable[A] | None = None, *, outputs: Iterable[B] | None = None
    ) -> bool:
        """No candidate input relates to more than one output."""
        ins = self.resolve_inputs(inputs, "is_single_valued")
        return all(len(self.image(SetView.of(a), outputs=outputs)) <= 1 for a in ins)

    def restrict(self, inputs: Iterable[A]) -> Relation[A, B]:
        """The sub-relation whose inputs are limited to *inputs*."""
        keep = SetView.from_iterable(inputs)
        parent = self

        def restricted(a: A, b: B) -> bool:
            return a in keep and parent.contains(a, b)

        return PredicateRelation(
            restricted,
            source=self.source,
            target=self.target,
            inputs=keep,
            outputs=self.default_outputs(),
            name=f"{self.label}|{keep!r}",
        )


def _warn_if_empty(r: Relation[Any, Any], view: SetView[Any], op: str, side: str) -> None:
    if not view and isinstance(r, PredicateRelation):
        logger.warning("%s on %s: candidate %s are empty", op, r.label, side)


# ---------------------------------------------------------------------------
# Explicit pairs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class FiniteRelation(Relation[A, B]):
    """A relation given by an explicit set of pairs.

    Example:
        FiniteRelation({("Hello", 5), ("Lean", 4), ("!", 1)}, STRING, NAT)

    Duplicate pairs collapse. Each pair is checked against the carriers at
    construction; a malformed pair raises :class:`TypeMismatch`.

    With no candidates, ``domain`` and ``range`` read the stored pairs, while
    queries that enumerate a side (``is_total``, ``pairs``) use the
    carrier's elements when the carrier is finite.
    """

    members: frozenset[Pair[A, B]]
    source: Carrier = ANY
    target: Carrier = ANY
    name: str = ""
    _forward: dict[A, frozenset[B]] = field(init=False, repr=False)
    _backward: dict[B, frozenset[A]] = field(init=False, repr=False)
    _origin: Relation[B, A] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        members = _normalize_pairs(self.members, self.source, self.target)
        forward: dict[A, set[B]] = {}
        backward: dict[B, set[A]] = {}
        for a, b in members:
            forward.setdefault(a, set()).add(b)
            backward.setdefault(b, set()).add(a)
        object.__setattr__(self, "members", members)
        object.__setattr__(
            self, "_forward", {a: frozenset(bs) for a, bs in forward.items()}
        )
        object.__setattr__(
            self, "_backward", {b: frozenset(as_) for b, as_ in backward.items()}
        )

    def __len__(self) -> int:
        return len(self.members)

    def contains(self, a: A, b: B) -> bool:
        return b in self._forward.get(a, ())

    def default_inputs(self) -> SetView[A]:
        if self.source.elements is not None:
            return self.source.elements
        return SetView(frozenset(self._forward))

    def default_outputs(self) -> SetView[B]:
        if self.target.elements is not None:
            return self.target.elements
        return SetView(frozenset(self._backward))

    def inverse(self) -> FiniteRelation[B, A]:
        if self._origin is not None:
            return self._origin  # type: ignore[return-value]
        return self._converse

    @cached_property
    def _converse(self) -> FiniteRelation[B, A]:
        inv: FiniteRelation[B, A] = FiniteRelation(
            frozenset((b, a) for a, b in self.members),
            source=self.target,
            target=self.source,
            name=f"{self.name}⁻¹" if self.name else "",
        )
        object.__setattr__(inv, "_origin", self)
        return inv

    def domain(
        self, candidates: Iterable[A] | None = None, *, outputs: Iterable[B] | None = None
    ) -> SetView[A]:
        return _linked(self._forward, candidates, outputs)

    def range(
        self, candidates: Iterable[B] | None = None, *, inputs: Iterable[A] | None = None
    ) -> SetView[B]:
        return _linked(self._backward, candidates, inputs)

    def image(self, s: Iterable[A], *, outputs: Iterable[B] | None = None) -> SetView[B]:
        return _reach(self._forward, s, outputs)

    def preimage(self, t: Iterable[B], *, inputs: Iterable[A] | None = None) -> SetView[A]:
        return _reach(self._backward, t, inputs)

    def pairs(
        self, inputs: Iterable[A] | None = None, outputs: Iterable[B] | None = None
    ) -> SetView[Pair[A, B]]:
        ins = None if inputs is None else SetView.from_iterable(inputs)
        outs = None if outputs is None else SetView.from_iterable(outputs)
        return SetView(
            frozenset(
                (a, b)
                for a, b in self.members
                if (ins is None or a in ins) and (outs is None or b in outs)
            )
        )

    def restrict(self, inputs: Iterable[A]) -> FiniteRelation[A, B]:
        keep = SetView.from_iterable(inputs)
        return FiniteRelation(
            frozenset((a, b) for a, b in self.members if a in keep),
            source=self.source,
            target=self.target,
            name=f"{self.label}|{keep!r}",
        )


def _normalize_pairs(
    pairs: Iterable[Any], source: Carrier, target: Carrier
) -> frozenset[Pair[Any, Any]]:
    normalized: set[Pair[Any, Any]] = set()
    for p in pairs:
        if not isinstance(p, tuple) or len(p) != 2:
            raise TypeMismatch(f"Relation members must be 2-tuples, got {p!r}")
        a, b = p
        source.require(a, "first component")
        target.require(b, "second component")
        normalized.add((a, b))
    return frozenset(normalized)


def _linked(
    index: dict[Any, frozenset[Any]],
    candidates: Iterable[Any] | None,
    partners: Iterable[Any] | None,
) -> SetView[Any]:
    """Keys of *index* (limited to candidates) with a partner (limited to partners)."""
    keys: Iterable[Any] = index if candidates is None else SetView.from_iterable(candidates)
    allowed = None if partners is None else SetView.from_iterable(partners).items
    return SetView(
        frozenset(
            k
            for k in keys
            if k in index and (allowed is None or not index[k].isdisjoint(allowed))
        )
    )


def _reach(
    index: dict[Any, frozenset[Any]],
    start: Iterable[Any],
    allowed: Iterable[Any] | None,
) -> SetView[Any]:
    reached: set[Any] = set()
    for x in SetView.from_iterable(start):
        reached.update(index.get(x, ()))
    if allowed is not None:
        reached &= SetView.from_iterable(allowed).items
    return SetView(frozenset(reached))


# ---------------------------------------------------------------------------
# Boolean tests
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class PredicateRelation(Relation[A, B]):
    """A relation given by a boolean test.

    Example:
        PredicateRelation(lambda s, n: len(s) == n, STRING, NAT)

    ``inputs`` and ``outputs`` are the candidates enumerated when a query
    is given none; without them the carriers' finite enumerations are used.
    They are checked against the carriers at construction. With
    ``memoize=True`` each outcome of ``test`` is computed once.
    """

    test: Callable[[A, B], bool]
    source: Carrier = ANY
    target: Carrier = ANY
    inputs: SetView[A] | None = None
    outputs: SetView[B] | None = None
    name: str = ""
    memoize: bool = False
    _memo: dict[Pair[A, B], bool] = field(default_factory=dict, init=False, repr=False)
    _origin: Relation[B, A] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if not callable(self.test):
            raise TypeMismatch(f"Relation test must be callable, got {self.test!r}")
        if self.inputs is not None:
            inputs = SetView.from_iterable(self.inputs)
            self.source.require_all(inputs, "candidate input")
            object.__setattr__(self, "inputs", inputs)
        if self.outputs is not None:
            outputs = SetView.from_iterable(self.outputs)
            self.target.require_all(outputs, "candidate output")
            object.__setattr__(self, "outputs", outputs)

    def contains(self, a: A, b: B) -> bool:
        if not self.memoize:
            return bool(self.test(a, b))
        key = (a, b)
        cached = self._memo.get(key)
        if cached is not None:
            return cached
        result = bool(self.test(a, b))
        self._memo[key] = result
        return result

    def default_inputs(self) -> SetView[A] | None:
        return self.inputs if self.inputs is not None else self.source.elements

    def default_outputs(self) -> SetView[B] | None:
        return self.outputs if self.outputs is not None else self.target.elements

    def inverse(self) -> PredicateRelation[B, A]:
        if self._origin is not None:
            return self._origin  # type: ignore[return-value]
        return self._converse

    @cached_property
    def _converse(self) -> PredicateRelation[B, A]:
        test = self.test

        def swapped(b: B, a: A) -> bool:
            return test(a, b)

        inv: PredicateRelation[B, A] = PredicateRelation(
            swapped,
            source=self.target,
            target=self.source,
            inputs=self.outputs,
            outputs=self.inputs,
            name=f"{self.name}⁻¹" if self.name else "",
            memoize=self.memoize,
        )
        object.__setattr__(inv, "_origin", self)
        return inv


# ---------------------------------------------------------------------------
# Stock relations and relation-level operations
# ---------------------------------------------------------------------------


def _always(a: object, b: object) -> bool:
    return True


def complete(
    domain_hint: Iterable[A],
    codomain_hint: Iterable[B],
    source: Carrier = ANY,
    target: Carrier = ANY,
) -> PredicateRelation[A, B]:
    """The relation relating every input to every output.

    The hints are the candidates its enumerating queries use by default.
    """
    return PredicateRelation(
        _always,
        source=source,
        target=target,
        inputs=SetView.from_iterable(domain_hint),
        outputs=SetView.from_iterable(codomain_hint),
        name="complete",
    )


def empty(source: Carrier = ANY, target: Carrier = ANY) -> FiniteRelation[Any, Any]:
    """The relation with no members."""
    return FiniteRelation(frozenset(), source=source, target=target, name="empty")


def equivalent(
    r: Relation[A, B], s: Relation[A, B], inputs: Iterable[A], outputs: Iterable[B]
) -> bool:
    """Extensional equality: r and s agree on every pair of the test grid."""
    ins = SetView.from_iterable(inputs)
    outs = SetView.from_iterable(outputs)
    for a in ins:
        for b in outs:
            if r.contains(a, b) != s.contains(a, b):
                logger.debug(
                    "%s and %s disagree on (%r, %r)", r.label, s.label, a, b
                )
                return False
    return True


def is_subrelation(
    r: Relation[A, B], s: Relation[A, B], inputs: Iterable[A], outputs: Iterable[B]
) -> bool:
    """Every member of r on the test grid is a member of s."""
    ins = SetView.from_iterable(inputs)
    outs = SetView.from_iterable(outputs)
    return all(
        s.contains(a, b) for a in ins for b in outs if r.contains(a, b)
    )


def compose(
    r: Relation[A, B], s: Relation[B, C], via: Iterable[B] | None = None
) -> Relation[A, C]:
    """{ (a, c) | ∃ b ∈ via. r(a, b) ∧ s(b, c) }, i.e. s ∘ r.

    *via* defaults to the outputs r enumerates by default.
    """
    name = f"{s.label} ∘ {r.label}"
    if not r.target.compatible(s.source):
        raise TypeMismatch(
            f"cannot compose {r.label} : {r.source.name} → {r.target.name} "
            f"with {s.label} : {s.source.name} → {s.target.name}"
        )
    if isinstance(r, FiniteRelation) and isinstance(s, FiniteRelation):
        middle = None if via is None else SetView.from_iterable(via)
        composed = {
            (a, c)
            for (a, b) in r.members
            if middle is None or b in middle
            for c in s.image(SetView.of(b))
        }
        return FiniteRelation(
            frozenset(composed), source=r.source, target=s.target, name=name
        )

    middle_view = r.resolve_outputs(via, "compose")

    def composed_test(a: A, c: C) -> bool:
        return any(r.contains(a, b) and s.contains(b, c) for b in middle_view)

    return PredicateRelation(
        composed_test,
        source=r.source,
        target=s.target,
        inputs=r.default_inputs(),
        outputs=s.default_outputs(),
        name=name,
    )

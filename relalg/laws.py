"""Law checking for relations over finite test sets.

A relation built from an arbitrary Python test cannot be proven correct,
but the algebraic laws every relation obeys can be checked on a finite
grid of inputs and outputs:

  involution           r⁻¹⁻¹ agrees with r on every pair
  inverse_membership   r⁻¹(b, a) ⇔ r(a, b)
  preimage_duality     preimage(r, t) = image(r⁻¹, t)
  image_domain         no output reachable from the candidates is lost by
                       going through domain(r) first
  domain_range         domain(r) = range(r⁻¹) and range(r) = domain(r⁻¹)
  domain_preimage      domain(r) = preimage(r, range(r))

Each violated law becomes a :class:`Diagnostic`; a law that cannot be
evaluated at all is reported once with the underlying error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import RelationError
from .relation import Relation, equivalent
from .setview import SetView

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    law: str
    severity: Severity
    message: str
    witness: tuple[Any, ...] | None = None


@dataclass(frozen=True)
class LawResult:
    relation_name: str
    laws_checked: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...]
    input_count: int = 0
    output_count: int = 0

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def holds(self) -> bool:
        return len(self.errors) == 0

    @property
    def failed_laws(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(d.law for d in self.errors))


@dataclass
class LawContext:
    relation: Relation[Any, Any]
    inputs: SetView[Any]
    outputs: SetView[Any]
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def error(self, law: str, message: str, witness: tuple[Any, ...] | None = None) -> None:
        self.diagnostics.append(Diagnostic(law, Severity.ERROR, message, witness))

    def warning(self, law: str, message: str, witness: tuple[Any, ...] | None = None) -> None:
        self.diagnostics.append(Diagnostic(law, Severity.WARNING, message, witness))


def check_involution(ctx: LawContext) -> None:
    r = ctx.relation
    rr = r.inverse().inverse()
    for a in ctx.inputs:
        for b in ctx.outputs:
            if rr.contains(a, b) != r.contains(a, b):
                ctx.error(
                    "involution",
                    f"inverse(inverse(r)) disagrees with r on ({a!r}, {b!r})",
                    (a, b),
                )


def check_inverse_membership(ctx: LawContext) -> None:
    r = ctx.relation
    inv = r.inverse()
    for a in ctx.inputs:
        for b in ctx.outputs:
            if inv.contains(b, a) != r.contains(a, b):
                ctx.error(
                    "inverse_membership",
                    f"inverse(r) contains ({b!r}, {a!r}) = {inv.contains(b, a)}, "
                    f"r contains ({a!r}, {b!r}) = {r.contains(a, b)}",
                    (a, b),
                )


def check_preimage_duality(ctx: LawContext) -> None:
    r = ctx.relation
    inv = r.inverse()
    # every singleton plus the whole output set
    targets = [SetView.of(b) for b in ctx.outputs] + [ctx.outputs]
    for t in targets:
        lhs = r.preimage(t, inputs=ctx.inputs)
        rhs = inv.image(t, outputs=ctx.inputs)
        if lhs != rhs:
            ctx.error(
                "preimage_duality",
                f"preimage(r, {t!r}) = {lhs!r} but image(inverse(r), {t!r}) = {rhs!r}",
                (t,),
            )


def check_image_domain(ctx: LawContext) -> None:
    r = ctx.relation
    dom = r.domain(ctx.inputs, outputs=ctx.outputs)
    through_domain = r.image(dom, outputs=ctx.outputs)
    direct = r.image(ctx.inputs, outputs=ctx.outputs)
    lost = direct - through_domain
    if lost:
        ctx.error(
            "image_domain",
            f"outputs {lost!r} are reachable from the candidates but not from domain(r)",
            tuple(lost),
        )


def check_domain_range(ctx: LawContext) -> None:
    r = ctx.relation
    inv = r.inverse()
    dom = r.domain(ctx.inputs, outputs=ctx.outputs)
    inv_rng = inv.range(ctx.inputs, inputs=ctx.outputs)
    if dom != inv_rng:
        ctx.error(
            "domain_range",
            f"domain(r) = {dom!r} but range(inverse(r)) = {inv_rng!r}",
        )
    rng = r.range(ctx.outputs, inputs=ctx.inputs)
    inv_dom = inv.domain(ctx.outputs, outputs=ctx.inputs)
    if rng != inv_dom:
        ctx.error(
            "domain_range",
            f"range(r) = {rng!r} but domain(inverse(r)) = {inv_dom!r}",
        )


def check_domain_preimage(ctx: LawContext) -> None:
    r = ctx.relation
    dom = r.domain(ctx.inputs, outputs=ctx.outputs)
    rng = r.range(ctx.outputs, inputs=ctx.inputs)
    back = r.preimage(rng, inputs=ctx.inputs)
    if dom != back:
        ctx.error(
            "domain_preimage",
            f"domain(r) = {dom!r} but preimage(r, range(r)) = {back!r}",
        )
    if not dom:
        ctx.warning("domain_preimage", "relation is empty over the test grid")


LAWS: dict[str, Callable[[LawContext], None]] = {
    "involution": check_involution,
    "inverse_membership": check_inverse_membership,
    "preimage_duality": check_preimage_duality,
    "image_domain": check_image_domain,
    "domain_range": check_domain_range,
    "domain_preimage": check_domain_preimage,
}


def check_laws(
    r: Relation[Any, Any],
    inputs: Iterable[Any] | None = None,
    outputs: Iterable[Any] | None = None,
    laws: Iterable[str] | None = None,
) -> LawResult:
    """Check the relation laws on the grid *inputs* × *outputs*.

    Missing candidate sets fall back to the relation's defaults, so a
    predicate relation over an infinite carrier needs both supplied.
    """
    ins = r.resolve_inputs(inputs, "check_laws")
    outs = r.resolve_outputs(outputs, "check_laws")
    names = tuple(laws) if laws is not None else tuple(LAWS)
    unknown = [n for n in names if n not in LAWS]
    if unknown:
        raise ValueError(f"Unknown laws: {', '.join(unknown)}")

    ctx = LawContext(relation=r, inputs=ins, outputs=outs)
    for name in names:
        try:
            LAWS[name](ctx)
        except RelationError as e:
            ctx.error(name, f"could not be evaluated: {e}")

    result = LawResult(
        relation_name=r.label,
        laws_checked=names,
        diagnostics=tuple(ctx.diagnostics),
        input_count=len(ins),
        output_count=len(outs),
    )
    if not result.holds:
        logger.warning(
            "%s violates %d law(s): %s",
            r.label,
            len(result.failed_laws),
            ", ".join(result.failed_laws),
        )
    return result


def check_empty(
    r: Relation[Any, Any], inputs: Iterable[Any], outputs: Iterable[Any]
) -> LawResult:
    """Check that r behaves as the empty relation on the test grid."""
    ins = SetView.from_iterable(inputs)
    outs = SetView.from_iterable(outputs)
    ctx = LawContext(relation=r, inputs=ins, outputs=outs)
    for a in ins:
        for b in outs:
            if r.contains(a, b):
                ctx.error("empty", f"contains ({a!r}, {b!r})", (a, b))
    if r.domain(ins, outputs=outs):
        ctx.error("empty", "domain over the candidates is not empty")
    if r.range(outs, inputs=ins):
        ctx.error("empty", "range over the candidates is not empty")
    return LawResult(r.label, ("empty",), tuple(ctx.diagnostics), len(ins), len(outs))


def check_complete(
    r: Relation[Any, Any], inputs: Iterable[Any], outputs: Iterable[Any]
) -> LawResult:
    """Check that r relates every candidate input to every candidate output."""
    ins = SetView.from_iterable(inputs)
    outs = SetView.from_iterable(outputs)
    ctx = LawContext(relation=r, inputs=ins, outputs=outs)
    for a in ins:
        for b in outs:
            if not r.contains(a, b):
                ctx.error("complete", f"does not contain ({a!r}, {b!r})", (a, b))
    return LawResult(r.label, ("complete",), tuple(ctx.diagnostics), len(ins), len(outs))


def agrees_with(
    r: Relation[Any, Any], s: Relation[Any, Any], inputs: Iterable[Any], outputs: Iterable[Any]
) -> LawResult:
    """Extensional comparison reported as a LawResult."""
    ins = SetView.from_iterable(inputs)
    outs = SetView.from_iterable(outputs)
    ctx = LawContext(relation=r, inputs=ins, outputs=outs)
    if not equivalent(r, s, ins, outs):
        for a in ins:
            for b in outs:
                if r.contains(a, b) != s.contains(a, b):
                    ctx.error(
                        "equivalent",
                        f"{r.label} and {s.label} disagree on ({a!r}, {b!r})",
                        (a, b),
                    )
    return LawResult(r.label, ("equivalent",), tuple(ctx.diagnostics), len(ins), len(outs))

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TextIO

import jinja2

from relalg.laws import LawResult, Severity
from relalg.relation import FiniteRelation, Relation

_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
_ENV = jinja2.Environment(
    loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template with the given keyword arguments."""
    template = _ENV.get_template(template_name)
    return template.render(**kwargs)


def render_relation(
    r: Relation[Any, Any],
    inputs: Iterable[Any] | None = None,
    outputs: Iterable[Any] | None = None,
    *,
    limit: int = 50,
    laws: LawResult | None = None,
) -> str:
    """Markdown summary of a relation over its (or the given) candidates."""
    ins = r.resolve_inputs(inputs, "render")
    outs = r.resolve_outputs(outputs, "render")
    pairs = r.pairs(ins, outs).sorted_items()
    return render(
        "relation.md.j2",
        name=r.label,
        source=r.source.name,
        target=r.target.name,
        kind="explicit pairs" if isinstance(r, FiniteRelation) else "predicate",
        domain=repr(r.domain(ins, outputs=outs)),
        range=repr(r.range(outs, inputs=ins)),
        total=r.is_total(ins, outputs=outs),
        single_valued=r.is_single_valued(ins, outputs=outs),
        pairs=[(repr(a), repr(b)) for a, b in pairs[:limit]],
        pair_count=len(pairs),
        truncated=len(pairs) > limit,
        laws=laws,
    )


@dataclass(frozen=True)
class LawRun:
    """Outcome of loading and law-checking a single relation."""

    target: str
    """File path or example name as provided by the user."""

    success: bool
    """``True`` if the relation was loaded and checked without error."""

    error: str | None
    """Load or evaluation error message when ``success`` is ``False``."""

    result: LawResult | None
    """Populated when ``success`` is ``True``."""


def _short(label: str, max_len: int = 24) -> str:
    if len(label) > max_len:
        return "…" + label[-(max_len - 1) :]
    return label


def print_law_table(runs: list[LawRun], out: TextIO) -> None:
    """Print a summary table of law checks.

    Columns: Relation | Holds | Inputs | Outputs | Laws | Errs | Warns
    """
    out.write("\n")
    out.write("  Relation                 │ Holds │ Inputs │ Outputs │ Laws │ Errs │ Warns\n")
    out.write("  ─────────────────────────┼───────┼────────┼─────────┼──────┼──────┼──────\n")

    total_loaded = 0
    total_holds = 0
    for run in runs:
        label = _short(run.target)
        match run.result:
            case None:
                out.write(f"  {label:<24} │  ✗    │   —    │    —    │  —   │  —   │  —\n")
            case res:
                total_loaded += 1
                holds = "✓" if res.holds else "✗"
                if res.holds:
                    total_holds += 1
                out.write(
                    f"  {label:<24} │  {holds}    │ {res.input_count:>5}  │ {res.output_count:>6}  "
                    f"│ {len(res.laws_checked):>3}  │ {len(res.errors):>3}  │ {len(res.warnings):>3}\n"
                )

    out.write("  ─────────────────────────┼───────┼────────┼─────────┼──────┼──────┼──────\n")
    n = len(runs)
    out.write(f"\n  Loaded:     {total_loaded}/{n}\n")
    out.write(f"  Laws hold:  {total_holds}/{total_loaded}\n\n")


def print_law_diagnostics(runs: list[LawRun], out: TextIO) -> None:
    """Print a per-relation diagnostic breakdown (violations, load failures)."""
    out.write("  --- Diagnostics ---\n")
    for run in runs:
        if run.result is None:
            out.write(f"\n  {run.target}\n")
            out.write(f"    ✗ {run.error}\n")
            continue
        if not run.result.diagnostics:
            continue
        out.write(f"\n  {run.target}\n")
        for d in run.result.diagnostics:
            mark = "✗" if d.severity == Severity.ERROR else "⚠"
            out.write(f"    {mark} [{d.law}] {d.message}\n")

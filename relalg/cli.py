import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

from relalg.carriers import Carrier
from relalg.config import Settings
from relalg.errors import RelationError
from relalg.examples import ALL_EXAMPLES
from relalg.laws import check_laws
from relalg.load import resolve_relation
from relalg.relation import Relation
from relalg.report import LawRun, print_law_diagnostics, print_law_table, render_relation
from relalg.result import Err, Ok

QUERIES = ("contains", "domain", "range", "image", "preimage", "inverse")


def _parse_values(c: Carrier, values: Sequence[str] | None) -> list[Any] | None:
    if values is None:
        return None
    return [c.parse(v) for v in values]


def handle_examples() -> int:
    for factory in ALL_EXAMPLES:
        r = factory()
        try:
            count = str(len(r.pairs()))
        except RelationError:
            count = "?"
        print(f"  {r.label:<12} {r.source.name} → {r.target.name:<10} {count:>3} pairs")
    return 0


def handle_show(target: str, settings: Settings) -> int:
    match resolve_relation(target, memoize=settings.memoize):
        case Err(e):
            print(f"Error: {e}", file=sys.stderr)
            return 1
        case Ok(r):
            pass
    try:
        print(render_relation(r, limit=settings.display_limit))
    except RelationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def handle_query(
    target: str,
    op: str,
    values: Sequence[str],
    *,
    inputs: Sequence[str] | None,
    outputs: Sequence[str] | None,
    settings: Settings,
) -> int:
    """Run one relation query and print its result."""
    match resolve_relation(target, memoize=settings.memoize):
        case Err(e):
            print(f"Error: {e}", file=sys.stderr)
            return 1
        case Ok(r):
            pass

    try:
        ins = _parse_values(r.source, inputs)
        outs = _parse_values(r.target, outputs)
        print(_run_query(r, op, values, ins, outs))
    except RelationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _run_query(
    r: Relation[Any, Any],
    op: str,
    values: Sequence[str],
    ins: list[Any] | None,
    outs: list[Any] | None,
) -> str:
    match op:
        case "contains":
            if len(values) != 2:
                raise RelationError("contains takes exactly two values: INPUT OUTPUT")
            return str(r.contains(r.source.parse(values[0]), r.target.parse(values[1])))
        case "domain":
            return repr(r.domain(_parse_values(r.source, values) or ins, outputs=outs))
        case "range":
            return repr(r.range(_parse_values(r.target, values) or outs, inputs=ins))
        case "image":
            return repr(r.image(_parse_values(r.source, values) or [], outputs=outs))
        case "preimage":
            return repr(r.preimage(_parse_values(r.target, values) or [], inputs=ins))
        case "inverse":
            inv = r.inverse()
            return repr(inv.pairs(outs, ins))
        case _:
            raise RelationError(f"Unknown query: {op}")


def handle_laws(targets: Sequence[str], *, verbose: bool, settings: Settings) -> int:
    """Load each relation, check the laws over its default candidates, and report."""
    runs: list[LawRun] = []
    for target in targets:
        match resolve_relation(target, memoize=settings.memoize):
            case Err(e):
                runs.append(LawRun(target=target, success=False, error=e, result=None))
                continue
            case Ok(r):
                pass
        try:
            result = check_laws(r)
        except RelationError as e:
            runs.append(LawRun(target=target, success=False, error=str(e), result=None))
            continue
        runs.append(LawRun(target=target, success=True, error=None, result=result))

    print_law_table(runs, sys.stdout)
    if verbose:
        print_law_diagnostics(runs, sys.stdout)

    any_failure = any(not run.success or not run.result.holds for run in runs)  # type: ignore[union-attr]
    return 1 if any_failure else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relalg",
        description="Query finite and predicate-backed binary relations",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: examples
    subparsers.add_parser("examples", help="List the built-in example relations.")

    # Command: show
    show_parser = subparsers.add_parser(
        "show", help="Print a Markdown summary of a relation."
    )
    show_parser.add_argument(
        "target", metavar="FILE|EXAMPLE", help="Relation file (.py/.json) or example name."
    )

    # Command: query
    query_parser = subparsers.add_parser("query", help="Run a single relation query.")
    query_parser.add_argument(
        "target", metavar="FILE|EXAMPLE", help="Relation file (.py/.json) or example name."
    )
    query_parser.add_argument("op", choices=QUERIES, help="Query to run.")
    query_parser.add_argument(
        "values",
        nargs="*",
        metavar="VALUE",
        help="Query arguments, parsed with the relation's carriers.",
    )
    query_parser.add_argument(
        "--inputs", nargs="+", metavar="VALUE", help="Candidate inputs for enumeration."
    )
    query_parser.add_argument(
        "--outputs", nargs="+", metavar="VALUE", help="Candidate outputs for enumeration."
    )

    # Command: laws
    laws_parser = subparsers.add_parser(
        "laws", help="Check the relation laws over each relation's candidates."
    )
    laws_parser.add_argument("targets", nargs="+", metavar="FILE|EXAMPLE")
    laws_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Print per-relation diagnostics after the table.",
    )
    return parser


def run(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    match Settings.from_env():
        case Err(e):
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1
        case Ok(settings):
            pass

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    match args.command:
        case "examples":
            return handle_examples()
        case "show":
            return handle_show(args.target, settings)
        case "query":
            return handle_query(
                args.target,
                args.op,
                args.values,
                inputs=args.inputs,
                outputs=args.outputs,
                settings=settings,
            )
        case "laws":
            return handle_laws(args.targets, verbose=args.verbose, settings=settings)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


def main() -> int:
    """Entry point for the console script."""
    try:
        return run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())

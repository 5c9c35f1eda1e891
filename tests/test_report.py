import io

from relalg.examples import accts_of_rel, strlen_rel
from relalg.helpers import sv
from relalg.laws import Diagnostic, LawResult, Severity, check_laws
from relalg.report import LawRun, print_law_diagnostics, print_law_table, render_relation


def test_render_relation_summary() -> None:
    text = render_relation(accts_of_rel())
    assert text.startswith("# acctsOf")
    assert "`acctsOf : Person → Account` (explicit pairs)" in text
    assert "| domain | {'Lu', 'Mary'} |" in text
    assert "| range | {1, 2, 3} |" in text
    assert "| single-valued | no |" in text
    assert "| total | no |" in text
    assert "## Pairs (3)" in text
    assert "- ('Mary', 2)" in text
    assert "## Laws" not in text


def test_render_relation_truncates() -> None:
    text = render_relation(strlen_rel(), limit=2)
    assert "(predicate)" in text
    assert "## Pairs (4)" in text
    assert "- … 2 more" in text


def test_render_relation_with_candidates_and_laws() -> None:
    r = accts_of_rel()
    laws = check_laws(r)
    text = render_relation(r, sv("Bob", "Lu"), sv(3), laws=laws)
    assert "| domain | {'Lu'} |" in text
    assert "| total | no |" in text
    assert "- involution: ok" in text


def _failed_result() -> LawResult:
    return LawResult(
        relation_name="broken",
        laws_checked=("involution",),
        diagnostics=(
            Diagnostic("involution", Severity.ERROR, "disagrees on (1, 1)", (1, 1)),
            Diagnostic("involution", Severity.WARNING, "relation is empty"),
        ),
        input_count=2,
        output_count=2,
    )


def test_law_table() -> None:
    runs = [
        LawRun("strlen3", True, None, check_laws(accts_of_rel())),
        LawRun("broken", True, None, _failed_result()),
        LawRun("missing.py", False, "Could not read file", None),
    ]
    out = io.StringIO()
    print_law_table(runs, out)
    text = out.getvalue()
    assert "Loaded:     2/3" in text
    assert "Laws hold:  1/2" in text
    assert "missing.py" in text


def test_law_diagnostics() -> None:
    runs = [
        LawRun("ok", True, None, check_laws(accts_of_rel())),
        LawRun("broken", True, None, _failed_result()),
        LawRun("missing.py", False, "Could not read file", None),
    ]
    out = io.StringIO()
    print_law_diagnostics(runs, out)
    text = out.getvalue()
    assert "✗ [involution] disagrees on (1, 1)" in text
    assert "⚠ [involution] relation is empty" in text
    assert "✗ Could not read file" in text
    assert "\n  ok\n" not in text

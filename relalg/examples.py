"""Worked example relations.

Each function builds a relation and returns it. Run this file to see
every example summarised with its domain, range and a few queries.

The examples follow the usual introductory sequence: a relation given by
a rule (string length), a finite fragment of it, a multi-valued and
non-total relation (bank accounts), the two extreme relations (complete
and empty), and a relation that is a curve rather than a function (the
unit circle).
"""

from fractions import Fraction

from relalg.carriers import NAT, RAT, STRING
from relalg.helpers import carrier, pred_rel, rel, sv
from relalg.relation import FiniteRelation, PredicateRelation, Relation, complete, empty

# ===================================================================
# Example 1: string length
#
#   strlen = { (s, n) | length(s) = n } ⊆ String × Nat
#
# Infinite: every string is related to exactly one number. Enumerating
# queries need candidates.
# ===================================================================


def strlen_rel() -> PredicateRelation[str, int]:
    """The string-length relation over all strings and naturals.

    source: String
    target: Nat
    member: (s, n) iff len(s) == n
    total and single-valued: it is the graph of a function.
    """
    return pred_rel(
        lambda s, n: len(s) == n,
        STRING,
        NAT,
        inputs=("Hello", "Lean", "!", ""),
        outputs=range(0, 8),
        name="strlen",
    )


def strlen3_rel() -> FiniteRelation[str, int]:
    """Three pairs of the string-length relation, written out.

    { ("Hello", 5), ("Lean", 4), ("!", 1) }
    """
    return rel(
        [("Hello", 5), ("Lean", 4), ("!", 1)],
        STRING,
        NAT,
        name="strlen3",
    )


# ===================================================================
# Example 2: accounts of a person
#
#   acctsOf = { (Mary, 1), (Mary, 2), (Lu, 3) } ⊆ Person × Account
#
# Multi-valued (Mary has two accounts) and not total (Bob has none).
# ===================================================================

PEOPLE = ("Mary", "Lu", "Bob")
ACCOUNTS = (1, 2, 3, 4)
PERSON = carrier("Person", str, elements=PEOPLE)
ACCOUNT = carrier("Account", int, elements=ACCOUNTS)


def accts_of_rel() -> FiniteRelation[str, int]:
    """Bank accounts held by each person.

    image({Mary}) = {1, 2}
    image({Bob})  = ∅       (Bob is in Person but not in the domain)
    account 4 is in Account but not in the range
    """
    return rel(
        [("Mary", 1), ("Mary", 2), ("Lu", 3)],
        PERSON,
        ACCOUNT,
        name="acctsOf",
    )


# ===================================================================
# Example 3: the extreme relations
# ===================================================================


def complete_rel() -> PredicateRelation[str, int]:
    """Every person related to every account."""
    return complete(PEOPLE, ACCOUNTS, PERSON, ACCOUNT)


def empty_rel() -> FiniteRelation[str, int]:
    """No person related to any account."""
    return empty(PERSON, ACCOUNT)


# ===================================================================
# Example 4: the unit circle
#
#   circle = { (x, y) | x² + y² = 1 } ⊆ ℚ × ℚ
#
# Neither a function of x nor of y: 3/5 relates to 4/5 and -4/5. The
# candidate grid holds the rational points from the Pythagorean triples
# (3, 4, 5) and (5, 12, 13) plus the axes.
# ===================================================================

_CIRCLE_COORDS = sv(
    *(
        sign * Fraction(n, d)
        for sign in (1, -1)
        for n, d in ((0, 1), (1, 1), (3, 5), (4, 5), (5, 13), (12, 13), (1, 2))
    )
)


def unit_circle_rel() -> PredicateRelation[Fraction, Fraction]:
    """Rational points on the unit circle.

    member: (x, y) iff x*x + y*y == 1
    domain over the grid excludes 1/2 (no rational partner).
    """
    return pred_rel(
        lambda x, y: x * x + y * y == 1,
        RAT,
        RAT,
        inputs=_CIRCLE_COORDS,
        outputs=_CIRCLE_COORDS,
        name="unitCircle",
    )


ALL_EXAMPLES = [
    strlen_rel,
    strlen3_rel,
    accts_of_rel,
    complete_rel,
    empty_rel,
    unit_circle_rel,
]


def example_by_name(name: str) -> Relation | None:
    """Look up an example by relation name or factory name."""
    for factory in ALL_EXAMPLES:
        r = factory()
        if name in (r.name, factory.__name__, factory.__name__.removesuffix("_rel")):
            return r
    return None


def main() -> None:
    for factory in ALL_EXAMPLES:
        r = factory()
        print(f"{r.label} : {r.source.name} → {r.target.name}")
        print(f"  domain: {r.domain()!r}")
        print(f"  range:  {r.range()!r}")
        print()


if __name__ == "__main__":
    main()

"""relalg: Binary relations over finite and predicate-defined carriers."""

from .setview import SetView
from .carriers import (
    ANY,
    BOOL,
    INT,
    NAT,
    RAT,
    STRING,
    Carrier,
)
from .errors import InvalidConstruction, RelationError, TypeMismatch
from .relation import (
    FiniteRelation,
    PredicateRelation,
    Relation,
    complete,
    compose,
    empty,
    equivalent,
    is_subrelation,
)
from .laws import Diagnostic, LawResult, Severity, check_laws
from .serialization import dumps, loads
from .helpers import carrier, pred_rel, rel, sv
from .result import Ok, Err, Result

__all__ = [
    # Sets and carriers
    "SetView", "Carrier", "ANY", "BOOL", "INT", "NAT", "RAT", "STRING",
    # Errors
    "InvalidConstruction", "RelationError", "TypeMismatch",
    # Relations
    "FiniteRelation", "PredicateRelation", "Relation",
    "complete", "compose", "empty", "equivalent", "is_subrelation",
    # Laws
    "Diagnostic", "LawResult", "Severity", "check_laws",
    # Serialization
    "dumps", "loads",
    # Helpers
    "carrier", "pred_rel", "rel", "sv",
    # Result
    "Ok", "Err", "Result",
]

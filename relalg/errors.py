"""Errors raised by relation construction and queries."""


class RelationError(Exception):
    """Base class for caller-facing relation errors."""


class InvalidConstruction(RelationError):
    """A query needs to enumerate a side of a relation that has no candidates.

    Raised, for example, when ``domain`` is called on a predicate-backed
    relation without candidate inputs and without a finite carrier to
    fall back on.
    """


class TypeMismatch(RelationError, TypeError):
    """A value does not belong to the carrier it was declared against."""

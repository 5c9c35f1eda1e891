"""Finite, explicitly enumerated sets of values.

A SetView is the value every set-valued query returns (domain, range,
image, preimage) and the value callers pass in as candidate sets.
Elements are unique and hashable; equality ignores order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SetView(Generic[T]):
    items: frozenset[T] = frozenset()

    @classmethod
    def of(cls, *items: T) -> SetView[T]:
        return cls(frozenset(items))

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> SetView[T]:
        if isinstance(items, SetView):
            return items
        return cls(frozenset(items))

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item: object) -> bool:
        return item in self.items

    def __bool__(self) -> bool:
        return bool(self.items)

    def __or__(self, other: SetView[T]) -> SetView[T]:
        return SetView(self.items | other.items)

    def __and__(self, other: SetView[T]) -> SetView[T]:
        return SetView(self.items & other.items)

    def __sub__(self, other: SetView[T]) -> SetView[T]:
        return SetView(self.items - other.items)

    def issubset(self, other: SetView[T]) -> bool:
        return self.items <= other.items

    def issuperset(self, other: SetView[T]) -> bool:
        return self.items >= other.items

    def sorted_items(self) -> list[T]:
        """Elements in a stable display order.

        Sorts naturally when the elements are mutually comparable and by
        ``repr`` otherwise.
        """
        try:
            return sorted(self.items)  # type: ignore[type-var]
        except TypeError:
            return sorted(self.items, key=_display_key)

    def __repr__(self) -> str:
        if not self.items:
            return "∅"
        return "{" + ", ".join(repr(x) for x in self.sorted_items()) + "}"


def _display_key(x: Any) -> tuple[str, str]:
    return (type(x).__name__, repr(x))


EMPTY: SetView[Any] = SetView()

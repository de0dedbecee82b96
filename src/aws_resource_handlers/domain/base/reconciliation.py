"""Set reconciliation for set-valued resource attributes."""

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Generic, Iterable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SetDelta(Generic[T]):
    """Items to add and remove to turn one set into another."""

    additions: FrozenSet[T]
    removals: FrozenSet[T]

    @property
    def is_empty(self) -> bool:
        """True when the two sets were already equal."""
        return not self.additions and not self.removals

    def apply(self, old: Iterable[T]) -> FrozenSet[T]:
        """Return ``(old - removals) | additions``."""
        return (frozenset(old) - self.removals) | self.additions


def diff(old: AbstractSet[T], new: AbstractSet[T]) -> SetDelta[T]:
    """
    Compute the delta between an old and a new set.

    Args:
        old: Previously applied set
        new: Desired set

    Returns:
        SetDelta with ``additions = new - old`` and ``removals = old - new``
    """
    old, new = frozenset(old), frozenset(new)
    return SetDelta(additions=new - old, removals=old - new)

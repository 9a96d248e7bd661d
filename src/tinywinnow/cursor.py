import logging

from collections import abc
from itertools import tee
from typing import Any, Generic, Iterable, Iterator, Optional, Protocol, TypeVar


class TotallyOrdered(Protocol):
    """Values that can be compared with '<' and '<=' against each other"""

    def __lt__(self, other: Any) -> bool: ...

    def __le__(self, other: Any) -> bool: ...


T = TypeVar("T", bound=TotallyOrdered)
T_co = TypeVar("T_co", covariant=True)


class ForwardSequence(Protocol[T_co]):
    """A re-enterable source of values: every call to iter() starts a new, independent pass"""

    def __iter__(self) -> Iterator[T_co]: ...


_END = object()


def check_forward(source: Iterable, name: str = "source"):
    """Rejects single-pass iterators, which can't be traversed more than once"""
    if isinstance(source, abc.Iterator):
        raise TypeError(
            f"The {name} must be a re-enterable sequence, not a single-pass {type(source).__name__}"
        )


def sequence_length(source: ForwardSequence) -> int:
    """Counts the values in a forward sequence, without disturbing any other traversal of it"""
    try:
        return len(source)
    except TypeError:
        return sum(1 for _ in source)


class DualCursor(Generic[T]):
    """Walks one source, or two equal-length sources in lockstep.

    The value at the cursor is the primary source's value, or the minimum of the
    primary and secondary values when a secondary source is present.
    """

    primary: Iterator[T]
    secondary: Optional[Iterator[T]]
    position: int
    secondary_position: Optional[int]
    logger: logging.Logger

    def __init__(self, primary: ForwardSequence[T], secondary: Optional[ForwardSequence[T]] = None):
        self.logger = logging.getLogger("DualCursor")
        self.primary = iter(primary)
        self.secondary = iter(secondary) if secondary is not None else None
        self.position = 0
        self.secondary_position = 0 if secondary is not None else None
        self._primary_value = next(self.primary, _END)
        self._secondary_value = next(self.secondary, _END) if self.secondary is not None else None

    @property
    def has_secondary(self) -> bool: return self.secondary is not None

    @property
    def at_end(self) -> bool:
        return self._primary_value is _END

    def value(self) -> T:
        if self._primary_value is _END:
            raise IndexError(f"Cursor is past the end of its source, at {self.position=}")
        if self.secondary is None:
            return self._primary_value
        return min(self._primary_value, self._secondary_value)

    def advance(self):
        if self.at_end:
            return
        self._primary_value = next(self.primary, _END)
        self.position += 1
        if self.secondary is not None:
            self._secondary_value = next(self.secondary, _END)
            self.secondary_position += 1
        if self.at_end:
            self.logger.debug(f"Reached end of source at {self.position=}")

    def __copy__(self) -> "DualCursor[T]":
        # the pre-tee iterators must not be pulled again
        other = DualCursor.__new__(DualCursor)
        other.logger = self.logger
        (self.primary, other.primary) = tee(self.primary)
        if self.secondary is not None:
            (self.secondary, other.secondary) = tee(self.secondary)
        else:
            other.secondary = None
        other.position = self.position
        other.secondary_position = self.secondary_position
        other._primary_value = self._primary_value
        other._secondary_value = self._secondary_value
        return other

    def __repr__(self) -> str:
        return f"DualCursor(position={self.position}, secondary_position={self.secondary_position}, at_end={self.at_end})"

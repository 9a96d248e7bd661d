import copy
import logging

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .cursor import DualCursor, ForwardSequence, TotallyOrdered, check_forward, sequence_length
from .window import MinimizerTracker, WindowBuffer

T = TypeVar("T", bound=TotallyOrdered)


class EndMarker:
    """Compares equal to any MinimizerIterator that has run off the end of its source"""

    def __repr__(self) -> str: return "END"


END = EndMarker()


class MinimizerIterator(Generic[T]):
    """A single forward pass over the minimizers of one source, or of two sources in lockstep.

    The iterator is primed on construction: the first 'window_size' values are pulled into
    the window (fewer if the source is shorter) and the first minimizer is found by a full
    scan. 'current' is the minimizer that the next call to next() returns, and step() moves
    on to the next window position where the minimizer changes.

    Equal consecutive values are reported once, except that a rescan after the minimizer
    drops out of the window always reports, even if it lands on an equal value.
    """

    source1: ForwardSequence[T]
    source2: Optional[ForwardSequence[T]]
    cursor: DualCursor[T]
    window: WindowBuffer[T]
    tracker: Optional[MinimizerTracker[T]]
    logger: logging.Logger

    def __init__(self, source1: ForwardSequence[T], source2: Optional[ForwardSequence[T]], window_size: int):
        self.logger = logging.getLogger("MinimizerIterator")
        self.source1 = source1
        self.source2 = source2
        self.window = WindowBuffer(min(window_size, sequence_length(source1)))
        self.cursor = DualCursor(source1, source2)
        self.tracker = None
        self.start()

    def start(self):
        size = self.window.prime(self.cursor)
        if size == 0:
            self.logger.debug("Empty source, no minimizers")
            return
        self.tracker = MinimizerTracker(self.window)
        self.logger.debug(f"Primed {self.window}, {self.tracker}")

    @property
    def at_end(self) -> bool: return self.cursor.at_end

    @property
    def current(self) -> T:
        if self.at_end:
            raise IndexError("No current minimizer, the iterator is exhausted")
        return self.tracker.value

    @property
    def base(self) -> int:
        """Position in the primary source of the newest value in the window"""
        return self.cursor.position

    def step(self):
        while not self.at_end:
            evicted = self.tracker.evicts_minimizer
            self.cursor.advance()
            if self.cursor.at_end:
                self.logger.debug(f"Exhausted after {self.tracker.rescans} rescans")
                return
            self.window.slide(self.cursor.value())
            if self.tracker.advance(evicted, self.window):
                if evicted:
                    self.logger.debug(f"Rescan at {self.base=}: {self.tracker}")
                return

    def __iter__(self) -> "MinimizerIterator[T]":
        return self

    def __next__(self) -> T:
        if self.at_end:
            raise StopIteration
        value = self.tracker.value
        self.step()
        return value

    def __eq__(self, other) -> bool:
        if isinstance(other, EndMarker):
            return self.at_end
        if isinstance(other, MinimizerIterator):
            return (
                self.source1 is other.source1 and
                self.source2 is other.source2 and
                self.cursor.position == other.cursor.position and
                self.cursor.secondary_position == other.cursor.secondary_position
            )
        return NotImplemented

    __hash__ = None

    def __copy__(self) -> "MinimizerIterator[T]":
        other = MinimizerIterator.__new__(MinimizerIterator)
        other.logger = self.logger
        other.source1 = self.source1
        other.source2 = self.source2
        other.cursor = copy.copy(self.cursor)
        other.window = copy.copy(self.window)
        other.tracker = copy.copy(self.tracker) if self.tracker is not None else None
        return other

    def __repr__(self) -> str:
        if self.at_end:
            return f"MinimizerIterator(END, base={self.base})"
        return f"MinimizerIterator(current={self.current}, base={self.base})"


class MinimizerView(Generic[T]):
    """A lazy, re-enterable view of the minimizers of one or two sources.

    Every call to iter() starts an independent pass. Nothing is read from the sources
    until a pass is started.
    """

    source1: ForwardSequence[T]
    source2: Optional[ForwardSequence[T]]
    window_size: int

    def __init__(self, source1: ForwardSequence[T], source2: Optional[ForwardSequence[T]], window_size: int):
        self.source1 = source1
        self.source2 = source2
        self.window_size = window_size
        logger = logging.getLogger("MinimizerView")
        logger.debug(f"MinimizerView({window_size=}, dual={source2 is not None})")

    def __iter__(self) -> MinimizerIterator[T]:
        return MinimizerIterator(self.source1, self.source2, self.window_size)

    def begin(self) -> MinimizerIterator[T]: return iter(self)

    def end(self) -> EndMarker: return END

    def __repr__(self) -> str:
        return f"MinimizerView(window_size={self.window_size}, dual={self.source2 is not None})"


def check_window_size(window_size: int):
    if window_size < 1:
        raise ValueError(f"The window_size must be a positive integer, got {window_size}")


def minimizers(source: ForwardSequence[T], window_size: int) -> MinimizerView[T]:
    """Creates a lazy view of the minimizers of 'source', in windows of 'window_size' values

    A minimizer is the smallest value in a window. For [28, 100, 9, 23, 4, 1, 72, 37, 8] and
    a window_size of 4, the minimizers are [9, 4, 1]. If the source is shorter than the
    window, its overall minimum is the only minimizer.
    """
    check_window_size(window_size)
    if window_size == 1:
        raise ValueError(
            "The chosen window_size is not valid. Please choose a value greater than 1 or use two sequences."
        )
    check_forward(source)
    return MinimizerView(source, None, window_size)


def dual_minimizers(source1: ForwardSequence[T], source2: ForwardSequence[T], window_size: int) -> MinimizerView[T]:
    """Creates a lazy view of the minimizers over two equal-length sources

    The value at each window position is the smaller of the two sources' values there.
    """
    check_window_size(window_size)
    check_forward(source1, "first source")
    check_forward(source2, "second source")
    (n1, n2) = (sequence_length(source1), sequence_length(source2))
    if n1 != n2:
        raise ValueError(f"The two sequences do not have the same size: {n1} != {n2}")
    return MinimizerView(source1, source2, window_size)


@dataclass(frozen=True)
class MinimizerAdaptor:
    """Applies 'minimizers' with a fixed window_size, either called or piped: values | minimizer(4)"""

    window_size: int

    def __call__(self, source: ForwardSequence[T], secondary: Optional[ForwardSequence[T]] = None) -> MinimizerView[T]:
        if secondary is None:
            return minimizers(source, self.window_size)
        return dual_minimizers(source, secondary, self.window_size)

    def __ror__(self, source: ForwardSequence[T]) -> MinimizerView[T]:
        return self(source)


def minimizer(window_size: int) -> MinimizerAdaptor:
    return MinimizerAdaptor(window_size)

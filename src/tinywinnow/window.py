from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

from .cursor import DualCursor, TotallyOrdered

T = TypeVar("T", bound=TotallyOrdered)


def argmin_rightmost(window: "WindowBuffer[T]") -> Tuple[T, int]:
    """Takes a window of values, and returns (value, offset) of its minimum

    Ties resolve to the rightmost of the equal minimal values (robust winnowing): a later
    value replaces the current best whenever it is less-than-or-equal to it.
    """
    i = 0
    best = window[0]
    for j in range(1, len(window)):
        v = window[j]
        if v <= best:
            best = v
            i = j
    return (best, i)


class WindowBuffer(Generic[T]):
    """Fixed-capacity ring buffer holding the values of the current window, oldest first.
    """

    capacity: int
    values: List[Optional[T]]
    head: int
    size: int

    def __init__(self, capacity: int):
        self.capacity = capacity
        self.values = [None for _ in range(capacity)]
        self.head = 0
        self.size = 0

    def prime(self, cursor: DualCursor) -> int:
        """Pulls up to 'capacity' values from the cursor, in arrival order.

        The cursor is left on the newest window value. The capacity must already be
        clamped to the source length.
        """
        while not cursor.at_end and self.size < self.capacity:
            self.values[self.size] = cursor.value()
            self.size += 1
            if self.size < self.capacity:
                cursor.advance()
        return self.size

    def slide(self, value: T):
        # evicts the oldest value by overwriting it
        self.values[self.head] = value
        self.head = (self.head + 1) % self.size

    def __getitem__(self, i: int) -> T:
        if i < 0:
            i += self.size
        if i < 0 or i >= self.size:
            raise IndexError(f"Window offset {i} out of range for {self.size} values")
        return self.values[(self.head + i) % self.size]

    def __len__(self) -> int: return self.size

    def __iter__(self) -> Iterator[T]:
        for i in range(self.size):
            yield self[i]

    def __copy__(self) -> "WindowBuffer[T]":
        other = WindowBuffer(self.capacity)
        other.values = list(self.values)
        other.head = self.head
        other.size = self.size
        return other

    def __repr__(self) -> str:
        return f"WindowBuffer({list(self)}, capacity={self.capacity})"


class MinimizerTracker(Generic[T]):
    """Tracks the minimizer of a WindowBuffer as it slides.

    'offset' is the position of the minimizer within the window (0 is the oldest value).
    A full rescan of the window only happens when the minimizer itself is evicted;
    otherwise each slide is an O(1) update.
    """

    value: T
    offset: int
    rescans: int

    def __init__(self, window: WindowBuffer[T]):
        self.rescans = 0
        self.scan_full(window)

    def scan_full(self, window: WindowBuffer[T]):
        (self.value, self.offset) = argmin_rightmost(window)

    @property
    def evicts_minimizer(self) -> bool:
        """True if the next slide drops the tracked minimizer out of the window"""
        return self.offset == 0

    def advance(self, evicted: bool, window: WindowBuffer[T]) -> bool:
        """Updates the tracked minimizer after 'window' has slid by one value.

        'evicted' says whether the value that left the window was the tracked minimizer.
        Returns True when the minimizer changed. A rescan always counts as a change, even
        when an equal value left in the window becomes the new minimizer.
        """
        new_value = window[-1]
        if evicted:
            self.scan_full(window)
            self.rescans += 1
            return True
        elif new_value < self.value:
            self.value = new_value
            self.offset = len(window) - 1
            return True
        else:
            self.offset -= 1
            return False

    def __copy__(self) -> "MinimizerTracker[T]":
        other = MinimizerTracker.__new__(MinimizerTracker)
        other.value = self.value
        other.offset = self.offset
        other.rescans = self.rescans
        return other

    def __repr__(self) -> str:
        return f"MinimizerTracker(value={self.value}, offset={self.offset})"

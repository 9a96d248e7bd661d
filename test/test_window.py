import pytest

from copy import copy
from tinywinnow.cursor import DualCursor
from tinywinnow.window import WindowBuffer, MinimizerTracker, argmin_rightmost


def primed(values, capacity):
    cursor = DualCursor(values)
    window = WindowBuffer(min(capacity, len(values)))
    window.prime(cursor)
    return (window, cursor)


def test_prime_fills_to_capacity():
    (window, cursor) = primed([3, 1, 4, 1, 5], 3)
    assert list(window) == [3, 1, 4]
    assert len(window) == 3
    assert cursor.position == 2
    assert cursor.value() == 4


def test_prime_short_source():
    (window, cursor) = primed([3, 1], 5)
    assert list(window) == [3, 1]
    assert window.capacity == 2
    assert cursor.position == 1
    assert not cursor.at_end


def test_prime_empty_source():
    (window, cursor) = primed([], 3)
    assert len(window) == 0
    assert cursor.at_end


def test_slide_wraps_around():
    (window, _) = primed([1, 2, 3], 3)
    for v in [4, 5, 6, 7]:
        window.slide(v)
        assert len(window) == 3
    assert list(window) == [5, 6, 7]
    assert window[0] == 5
    assert window[-1] == 7
    with pytest.raises(IndexError):
        window[3]


def test_window_copy_is_independent():
    (window, _) = primed([1, 2, 3], 3)
    other = copy(window)
    window.slide(9)
    assert list(window) == [2, 3, 9]
    assert list(other) == [1, 2, 3]


def test_argmin_prefers_rightmost():
    assert argmin_rightmost(primed([5, 5, 5], 3)[0]) == (5, 2)
    assert argmin_rightmost(primed([2, 1, 3, 1, 4], 5)[0]) == (1, 3)
    assert argmin_rightmost(primed([9], 1)[0]) == (9, 0)
    assert argmin_rightmost(primed([1, 2, 3], 3)[0]) == (1, 0)


def test_tracker_takes_smaller_new_value():
    (window, _) = primed([28, 100, 9, 23], 4)
    tracker = MinimizerTracker(window)
    assert (tracker.value, tracker.offset) == (9, 2)
    evicted = tracker.evicts_minimizer
    assert not evicted
    window.slide(4)
    assert tracker.advance(evicted, window)
    assert (tracker.value, tracker.offset) == (4, 3)
    assert tracker.rescans == 0


def test_tracker_unchanged_shifts_offset():
    (window, _) = primed([7, 3, 8, 9], 4)
    tracker = MinimizerTracker(window)
    assert tracker.offset == 1
    window.slide(10)
    assert not tracker.advance(False, window)
    assert (tracker.value, tracker.offset) == (3, 0)
    assert tracker.evicts_minimizer


def test_tracker_equal_new_value_does_not_move():
    (window, _) = primed([2, 1, 3], 3)
    tracker = MinimizerTracker(window)
    window.slide(1)
    assert not tracker.advance(False, window)
    assert (tracker.value, tracker.offset) == (1, 0)


def test_tracker_rescan_reports_equal_value():
    (window, _) = primed([1, 3, 1], 3)
    tracker = MinimizerTracker(window)
    tracker.offset = 0
    window.slide(5)
    assert tracker.advance(True, window)
    assert (tracker.value, tracker.offset) == (1, 1)
    assert tracker.rescans == 1

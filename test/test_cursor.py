import pytest

from copy import copy
from tinywinnow.cursor import DualCursor, check_forward, sequence_length


def test_single_cursor():
    cursor = DualCursor([5, 1, 7])
    assert not cursor.has_secondary
    assert cursor.value() == 5
    cursor.advance()
    assert (cursor.value(), cursor.position) == (1, 1)
    cursor.advance()
    cursor.advance()
    assert cursor.at_end
    assert cursor.position == 3


def test_dual_cursor_takes_minimum():
    cursor = DualCursor([5, 1, 7], [3, 4, 7])
    values = []
    while not cursor.at_end:
        values.append(cursor.value())
        assert cursor.position == cursor.secondary_position
        cursor.advance()
    assert values == [3, 1, 7]


def test_advance_past_end():
    cursor = DualCursor([1])
    cursor.advance()
    cursor.advance()
    assert cursor.at_end
    assert cursor.position == 1
    with pytest.raises(IndexError):
        cursor.value()


def test_empty_source():
    assert DualCursor([]).at_end
    assert DualCursor([], []).at_end


def test_cursor_copy_is_independent(replayable):
    cursor = DualCursor(range(5), replayable(range(10, 15)))
    cursor.advance()
    cursor.advance()
    other = copy(cursor)
    cursor.advance()
    assert cursor.value() == 3
    assert other.value() == 2
    assert other.position == 2
    for _ in range(3):
        other.advance()
    assert other.at_end
    assert not cursor.at_end
    assert cursor.value() == 3


def test_check_forward(replayable):
    check_forward([1, 2])
    check_forward((1, 2))
    check_forward(range(3))
    check_forward(replayable([1]))
    with pytest.raises(TypeError):
        check_forward(iter([1, 2]))
    with pytest.raises(TypeError):
        check_forward(x for x in [1, 2])


def test_sequence_length(replayable):
    assert sequence_length([1, 2, 3]) == 3
    assert sequence_length(range(7)) == 7
    r = replayable([4, 5])
    assert sequence_length(r) == 2
    assert r.passes == 1

# Copyright (c) 2026 termview contributors
# SPDX-License-Identifier: ISC
#
# CursorField content tests: loading, line splitting, visible-line
# projection, scroll_to(), and single-step auto-scroll on right moves.

import types

import pytest

from conftest import make_field, visible
from cursorfield import split_lines

# ---------------------------------------------------------------------------
# Line splitting
# ---------------------------------------------------------------------------


def test_split_lines():
    assert split_lines("") == []
    assert split_lines("a") == ["a"]
    assert split_lines("a\n") == ["a"]
    assert split_lines("\n") == [""]
    assert split_lines("a\r\nb") == ["a", "b"]
    assert split_lines("a\n\nb\n") == ["a", "", "b"]

    # Only "\n" separates lines; a lone "\r" or form feed is content
    assert split_lines("a\rb\x0cc") == ["a\rb\x0cc"]


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def test_unloaded_field_has_no_visible_lines(field):
    assert not field.is_loaded()
    assert visible(field) == []
    assert field.line_count() == 0
    assert field.current_line() is None


def test_load_keeps_cursor_and_scroll(field):
    field.load("one\ntwo")
    field.move_right(5)
    field.move_down(1)
    field.scroll_to(2, 0)

    field.load("three\nfour\nfive")
    assert field.cursor_screen_position() == (5, 1)
    assert tuple(field.scroll_amount) == (2, 0)
    assert field.line_count() == 3
    assert field.current_line() == "four"


def test_load_none_detaches(field):
    field.load("text")
    field.load(None)
    assert not field.is_loaded()
    assert visible(field) == []


def test_load_replaces_lines():
    field = make_field(10, 3, "old")
    assert visible(field) == ["old"]
    field.load("new\nlines")
    assert visible(field) == ["new", "lines"]


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------


def test_width_and_height_clipping():
    field = make_field(4, 1, "First\r\nSecond")
    assert visible(field) == ["Firs"]


def test_all_lines_when_they_fit():
    field = make_field(10, 5, "First\r\nSecond\nThird")
    assert visible(field) == ["First", "Second", "Third"]


def test_empty_lines_are_emitted():
    field = make_field(10, 5, "a\n\nb")
    assert visible(field) == ["a", "", "b"]


def test_scroll_to_shifts_columns():
    field = make_field(4, 1, "First")
    field.scroll_to(1, 0)
    assert visible(field) == ["irst"]


def test_line_shorter_than_scroll_offset_gives_empty_slice():
    field = make_field(4, 3, "Long line here\nab\nanother long one")
    field.scroll_to(5, 0)
    assert visible(field) == ["line", "", "er l"]


def test_scroll_far_past_content_is_valid():
    field = make_field(4, 2, "First\nSecond")
    field.scroll_to(1000, 1000)
    assert visible(field) == ["", ""]


@pytest.mark.parametrize("column_ix, row_ix", ((-1, 0), (0, -1), (-3, -3)))
def test_negative_scroll_rejected(column_ix, row_ix):
    field = make_field(4, 2, "First\nSecond")
    field.scroll_to(2, 0)
    with pytest.raises(ValueError):
        field.scroll_to(column_ix, row_ix)
    assert tuple(field.scroll_amount) == (2, 0)
    assert visible(field) == ["rst", "cond"]


def test_accessors_return_copies():
    field = make_field(4, 2, "First\nSecond")
    field.move_right(2)
    field.scroll_to(1, 0)

    cursor = field.cursor_location
    cursor.column_ix = 100
    cursor.row_ix = 100
    scroll = field.scroll_amount
    scroll.column_ix = 100

    assert field.cursor_screen_position() == (2, 0)
    assert tuple(field.cursor_location) == (2, 0)
    assert tuple(field.scroll_amount) == (1, 0)
    assert visible(field) == ["irst", "econ"]


def test_row_scroll_not_used_for_projection():
    field = make_field(10, 2, "one\ntwo\nthree")
    field.scroll_to(0, 1)
    assert visible(field) == ["one", "two"]


def test_zero_rows_gives_nothing():
    field = make_field(10, 0, "one\ntwo")
    assert visible(field) == []


def test_zero_columns_gives_empty_slices():
    field = make_field(0, 2, "one\ntwo")
    assert visible(field) == ["", ""]


def test_visible_lines_is_lazy_and_fresh():
    field = make_field(4, 2, "First\nSecond")
    lines = field.visible_lines()
    assert isinstance(lines, types.GeneratorType)
    assert list(lines) == ["Firs", "Seco"]

    # A new call reflects the state at that point
    field.scroll_to(2, 0)
    assert visible(field) == ["rst", "cond"]


def test_lines_past_viewport_height_are_never_visited():
    class Lines(list):
        # Records which lines get read
        def __iter__(self):
            for i, line in enumerate(list.__iter__(self)):
                self.visited = i
                yield line

    field = make_field(4, 2, "a\nb\nc\nd")
    field._lines = Lines(field._lines)
    assert visible(field) == ["a", "b"]
    assert field._lines.visited == 1


# ---------------------------------------------------------------------------
# Auto-scroll
# ---------------------------------------------------------------------------


def test_move_right_past_edge_scrolls_once():
    field = make_field(4, 1, "First")
    field.move_right(4)
    assert visible(field) == ["irst"]
    assert field.cursor_screen_position() == (3, 0)
    assert field.scroll_amount.column_ix == 1


def test_large_move_right_scrolls_only_one_step():
    field = make_field(4, 1, "First")
    field.move_right(10)
    assert visible(field) == ["irst"]


def test_auto_scroll_stops_when_line_fully_shown():
    field = make_field(4, 1, "First")
    for _ in range(5):
        field.move_right(1)
    assert field.scroll_amount.column_ix == 1
    assert visible(field) == ["irst"]
    assert field.cursor_location.column_ix == 3


def test_repeated_moves_scroll_a_long_line_to_its_end():
    field = make_field(4, 1, "0123456789")
    for _ in range(20):
        field.move_right(1)
    assert field.scroll_amount.column_ix == 6
    assert visible(field) == ["6789"]


def test_move_within_bounds_does_not_scroll():
    field = make_field(4, 1, "First")
    field.move_right(3)
    assert field.scroll_amount.column_ix == 0
    assert visible(field) == ["Firs"]


def test_auto_scroll_uses_line_under_cursor():
    field = make_field(4, 2, "ab\nlong line")

    # Row 0 is short, so hitting the edge there only clamps
    field.move_right(10)
    assert field.scroll_amount.column_ix == 0

    field.move_down(1)
    field.move_right(1)
    assert field.scroll_amount.column_ix == 1
    assert visible(field) == ["b", "ong "]


def test_auto_scroll_below_last_line_only_clamps():
    field = make_field(4, 5, "long line")
    field.move_down(3)
    field.move_right(10)
    assert field.scroll_amount.column_ix == 0
    assert field.cursor_location.column_ix == 3


def test_auto_scroll_without_content_only_clamps():
    field = make_field(4, 1)
    field.move_right(10)
    assert field.scroll_amount.column_ix == 0
    assert field.cursor_location.column_ix == 3


def test_auto_scroll_counts_row_scroll_for_line_lookup():
    field = make_field(4, 1, "ab\nlong line")
    field.scroll_to(0, 1)
    field.move_right(10)
    assert field.scroll_amount.column_ix == 1


def test_move_left_never_scrolls_back():
    field = make_field(4, 1, "First")
    field.move_right(4)
    field.move_left(10)
    assert field.cursor_location.column_ix == 0
    assert visible(field) == ["irst"]

    field.scroll_to(0, 0)
    assert visible(field) == ["Firs"]

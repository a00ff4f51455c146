# Copyright (c) 2026 termview contributors
# SPDX-License-Identifier: ISC

"""
Cursor movement and content projection for termview.

A CursorField binds a Viewport (the only source of truth for bounds), a
screen-relative cursor Location, a content-relative scroll Location and,
once load() has been called, a block of text.

Every movement is clamped to the viewport independently, so the cursor is
always inside it after any operation. Moving right past the right edge
scrolls the content one column, but only while the line under the cursor
still has hidden text to the right. There is no leftward or vertical
auto-scroll; scroll_to() is the way back.

Sample usage:

  >>> from viewport import Viewport, Dimensions
  >>> field = CursorField(Viewport(Dimensions(4, 1)))
  >>> field.load("First\\r\\nSecond")
  >>> list(field.visible_lines())
  ['Firs']
  >>> field.move_right(4)
  >>> list(field.visible_lines())
  ['irst']
  >>> field.cursor_screen_position()
  (3, 0)
"""

from itertools import islice

from viewport import Location, Viewport


def split_lines(content):
    """
    Splits 'content' into lines on "\\n", removing a "\\r" before each
    separator. A trailing separator does not start an extra empty line.

    >>> split_lines("First\\r\\nSecond")
    ['First', 'Second']
    >>> split_lines("a\\n\\nb\\n")
    ['a', '', 'b']
    >>> split_lines("")
    []
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()

    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _check_magnitude(n):
    if n < 0:
        raise ValueError(f"movement magnitude must be non-negative, got {n}")


class CursorField:
    """
    A cursor position bounded by a Viewport, over optional text content.

    viewport:
      The Viewport whose dimensions bound the cursor. It is held by
      reference, so resizing it directly is seen by the field.
    """

    def __init__(self, viewport=None):
        self._viewport = Viewport() if viewport is None else viewport
        self._cursor = Location()
        self._scroll = Location()
        self._content = None
        self._lines = None

    #
    # State
    #

    @property
    def viewport(self):
        return self._viewport

    @property
    def dimensions(self):
        return self._viewport.dimensions

    @property
    def cursor_location(self):
        """A copy of the cursor position. Use the move_*() methods to move it."""
        return Location(self._cursor.column_ix, self._cursor.row_ix)

    @property
    def scroll_amount(self):
        """A copy of the scroll offset. Use scroll_to() to change it."""
        return Location(self._scroll.column_ix, self._scroll.row_ix)

    @property
    def content(self):
        return self._content

    def is_loaded(self):
        return self._content is not None

    def line_count(self):
        """Number of content lines, 0 if nothing is loaded."""
        return len(self._lines) if self._lines is not None else 0

    def cursor_screen_position(self):
        """Returns the cursor position as a (column_ix, row_ix) tuple."""
        return (self._cursor.column_ix, self._cursor.row_ix)

    def current_line(self):
        # The content line the cursor is on, or None if there is no such line
        if self._lines is None:
            return None

        line_ix = self._scroll.row_ix + self._cursor.row_ix
        if line_ix < len(self._lines):
            return self._lines[line_ix]
        return None

    #
    # Geometry
    #

    def resize(self, columns, rows=None):
        """
        Resizes the bound viewport. The cursor is not touched here; the next
        movement clamps it to the new size.
        """
        self._viewport.resize(columns, rows)

    def _max_column_ix(self):
        return max(self._viewport.columns - 1, 0)

    def _max_row_ix(self):
        return max(self._viewport.rows - 1, 0)

    def clamp(self):
        """Brings the cursor back inside the current dimensions."""
        self._cursor.column_ix = min(self._cursor.column_ix, self._max_column_ix())
        self._cursor.row_ix = min(self._cursor.row_ix, self._max_row_ix())

    #
    # Movement
    #

    def move_left(self, n):
        """Moves the cursor 'n' columns left, stopping at column 0."""
        _check_magnitude(n)
        self.clamp()
        self._cursor.column_ix = max(self._cursor.column_ix - n, 0)

    def move_right(self, n):
        """
        Moves the cursor 'n' columns right.

        If that would take the cursor past the right edge, the cursor stops at
        the last column, and the content is scrolled one column to the left if
        the line under the cursor continues past the right edge. At most one
        column is scrolled per call, regardless of 'n'.
        """
        _check_magnitude(n)
        self.clamp()

        column_ix = self._cursor.column_ix + n
        if column_ix <= self._max_column_ix():
            self._cursor.column_ix = column_ix
            return

        line = self.current_line()
        if (
            self._viewport.is_sized()
            and line is not None
            and len(line) > self._scroll.column_ix + self._viewport.columns
        ):
            self._scroll.column_ix += 1

        self._cursor.column_ix = self._max_column_ix()

    def move_up(self, n):
        """Moves the cursor 'n' rows up, stopping at row 0."""
        _check_magnitude(n)
        self.clamp()
        self._cursor.row_ix = max(self._cursor.row_ix - n, 0)

    def move_down(self, n):
        """Moves the cursor 'n' rows down, stopping at the last row."""
        _check_magnitude(n)
        self.clamp()

        row_ix = self._cursor.row_ix + n
        if row_ix >= self._viewport.rows:
            row_ix = self._max_row_ix()
        self._cursor.row_ix = row_ix

    #
    # Content
    #

    def load(self, content):
        """
        Attaches new content, replacing any previous content. Pass None to
        detach. The cursor and scroll offset are left alone; reset them
        explicitly for a fresh view.
        """
        self._content = content
        self._lines = split_lines(content) if content is not None else None

    def scroll_to(self, column_ix, row_ix):
        # Overwrites the scroll offset. Scrolling past the end of the content
        # is allowed and just shows nothing.
        if column_ix < 0 or row_ix < 0:
            raise ValueError(
                f"scroll offset must be non-negative, got ({column_ix}, {row_ix})"
            )
        self._scroll.column_ix = column_ix
        self._scroll.row_ix = row_ix

    def visible_lines(self):
        """
        Generates the visible slice of each content line, one per display row,
        in content order. Lines shorter than the horizontal scroll offset give
        "". Stops after as many lines as there are rows. Computed from the
        current state each time it is called.

        The row component of the scroll offset is not used here.
        """
        if self._lines is None:
            return

        start = self._scroll.column_ix
        width = self._viewport.columns

        for line in islice(self._lines, max(self._viewport.rows, 0)):
            if start > len(line):
                yield ""
            else:
                yield line[start : min(start + width, len(line))]

    def __repr__(self):
        return "CursorField({}, cursor={}, scroll={}, {})".format(
            self._viewport,
            self._cursor,
            self._scroll,
            "{} lines".format(len(self._lines)) if self._lines is not None else "unloaded",
        )

# Copyright (c) 2026 termview contributors
# SPDX-License-Identifier: ISC

"""
Display geometry for termview.

A Viewport owns the size of the rectangular region content is drawn into.
It knows nothing about cursors: resizing never repositions or re-clamps a
cursor, that happens in the CursorField on its next operation.

Coordinates are zero-based. Column 0 is the left-hand most column, row 0 the
top row.
"""


class Dimensions:
    """Immutable (columns, rows) size of a display region."""

    __slots__ = ("_columns", "_rows")

    def __init__(self, columns, rows):
        self._columns = columns
        self._rows = rows

    @property
    def columns(self):
        return self._columns

    @property
    def rows(self):
        return self._rows

    def __iter__(self):
        return iter((self._columns, self._rows))

    def __eq__(self, other):
        if not isinstance(other, Dimensions):
            return NotImplemented
        return self._columns == other._columns and self._rows == other._rows

    def __hash__(self):
        return hash((self._columns, self._rows))

    def __repr__(self):
        return f"Dimensions({self._columns}, {self._rows})"


class Location:
    """
    A (column_ix, row_ix) position.

    Used both for the screen-relative cursor position and for the
    content-relative scroll offset, so it is mutable.
    """

    __slots__ = ("column_ix", "row_ix")

    def __init__(self, column_ix=0, row_ix=0):
        self.column_ix = column_ix
        self.row_ix = row_ix

    def __iter__(self):
        return iter((self.column_ix, self.row_ix))

    def __eq__(self, other):
        if not isinstance(other, Location):
            return NotImplemented
        return self.column_ix == other.column_ix and self.row_ix == other.row_ix

    __hash__ = None

    def __repr__(self):
        return f"Location({self.column_ix}, {self.row_ix})"


# Size of a viewport that has not received its first resize yet
UNSIZED = Dimensions(0, 0)


class Viewport:
    """Holds the current display size and exposes it for bounds checks."""

    def __init__(self, dimensions=None):
        self._dimensions = UNSIZED if dimensions is None else dimensions

    @property
    def dimensions(self):
        return self._dimensions

    @property
    def columns(self):
        return self._dimensions.columns

    @property
    def rows(self):
        return self._dimensions.rows

    def is_sized(self):
        """True if there is at least one visible row and column."""
        return self._dimensions.columns >= 1 and self._dimensions.rows >= 1

    def resize(self, columns, rows=None):
        """
        Replaces the dimensions unconditionally.

        Accepts either a Dimensions instance or separate column and row
        counts. Always succeeds; a size of 0 just means nothing is visible.
        """
        if isinstance(columns, Dimensions):
            self._dimensions = columns
        elif rows is None:
            raise TypeError("resize() needs a Dimensions or both columns and rows")
        else:
            self._dimensions = Dimensions(columns, rows)

    def __repr__(self):
        return f"Viewport({self._dimensions.columns}x{self._dimensions.rows})"

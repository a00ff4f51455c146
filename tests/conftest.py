# Copyright (c) 2026 termview contributors
# SPDX-License-Identifier: ISC
#
# Shared fixtures and helpers for the termview pytest suite.

import os
import sys

import pytest

# Ensure the project modules are importable from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cursorfield import CursorField  # noqa: E402
from rawterm import STYLE_DEFAULT  # noqa: E402
from viewport import Dimensions, Viewport  # noqa: E402

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_field(columns, rows, content=None):
    """Return a CursorField over a viewport of the given size."""
    field = CursorField(Viewport(Dimensions(columns, rows)))
    if content is not None:
        field.load(content)
    return field


def visible(field):
    return list(field.visible_lines())


class FakeTerminal:
    """Stands in for rawterm.Terminal: records the frame instead of drawing.

    'keys' is a list of keys returned by read_key(), in order. None entries
    simulate a poll timeout. Once the list runs out, "q" is returned.
    """

    def __init__(self, width=80, height=24, keys=()):
        self.width = width
        self.height = height
        self.keys = list(keys)
        self.cursor = (0, 0)
        self.cursor_visible = False
        self.updates = 0
        self.suspended = 0
        self.resumed = 0
        self.clear()

    def clear(self):
        self.rows = [[" "] * self.width for _ in range(self.height)]
        self.styles = {}

    def write(self, y, x, text, style=None):
        if y < 0 or y >= self.height or x < 0 or x >= self.width:
            return 0
        text = text[: self.width - x]
        self.rows[y][x : x + len(text)] = list(text)
        self.styles[y] = style if style is not None else STYLE_DEFAULT
        return len(text)

    def fill_row(self, y, style):
        if 0 <= y < self.height:
            self.rows[y] = [" "] * self.width
            self.styles[y] = style

    def set_cursor(self, y, x):
        self.cursor = (y, x)

    def show_cursor(self):
        self.cursor_visible = True

    def hide_cursor(self):
        self.cursor_visible = False

    def update(self):
        self.updates += 1

    def read_key(self, timeout=None):
        if not self.keys:
            return "q"
        return self.keys.pop(0)

    def suspend(self):
        self.suspended += 1

    def resume(self):
        self.resumed += 1

    def line(self, y):
        """Text on screen row y, without trailing blanks."""
        return "".join(self.rows[y]).rstrip()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def field():
    """An 80x24 CursorField with no content."""
    return make_field(80, 24)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep user style settings out of the tests."""
    monkeypatch.delenv("TERMVIEW_STYLE", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    yield

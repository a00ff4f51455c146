# Copyright (c) 2026 termview contributors
# SPDX-License-Identifier: ISC

"""
Status bars shown below the content area.

There is a fixed set of bar kinds. A Bar just records its kind and priority;
render_bar() produces the text for any kind. Bars with a smaller priority are
drawn further up.

Kinds:

  editor-info  : terminal size, uptime, frames and FPS
  status       : file path, viewport size and cursor position
  performance  : uptime, frames and FPS
"""

from collections import namedtuple

EDITOR_INFO = "editor-info"
STATUS = "status"
PERFORMANCE = "performance"

BAR_KINDS = (EDITOR_INFO, STATUS, PERFORMANCE)

# Shown in the status bar when no file is open
NO_FILE = "[No file]"


Bar = namedtuple("Bar", ("kind", "priority"))


# Bars shown when nothing else is requested
DEFAULT_BARS = (Bar(EDITOR_INFO, 0), Bar(STATUS, 1))


def sorted_bars(bars):
    """Returns 'bars' in drawing order, top to bottom."""
    return sorted(bars, key=lambda bar: bar.priority)


def parse_bars(bars_str):
    """
    Parses a comma-separated list of bar kinds, e.g. "status,performance",
    into Bars prioritized in the order given. An empty string gives no bars.

    Raises ValueError for unknown kinds.
    """
    bars = []
    for name in bars_str.split(","):
        name = name.strip()
        if not name:
            continue
        if name not in BAR_KINDS:
            raise ValueError(
                "unknown bar '{}' (expected one of: {})".format(name, ", ".join(BAR_KINDS))
            )
        bars.append(Bar(name, len(bars)))

    return bars


def render_bar(bar, field, stats, file_path=None):
    """
    Returns the text of 'bar'.

    field:
      CursorField whose viewport and cursor are described

    stats:
      FrameStats with the uptime and frame counters

    file_path:
      Path of the open file, or None
    """
    if bar.kind == EDITOR_INFO:
        columns, rows = field.dimensions
        return (
            f"[Editor Info] Cols: {columns} Rows: {rows} "
            f"Uptime (secs): {stats.uptime} Frames: {stats.frames} FPS: {stats.fps}"
        )

    if bar.kind == STATUS:
        columns, rows = field.dimensions
        column_ix, row_ix = field.cursor_screen_position()
        return (
            f"[Status] File path: {file_path or NO_FILE} "
            f"[Dimensions]: {columns}, {rows} [Cursor]: {column_ix}, {row_ix}"
        )

    if bar.kind == PERFORMANCE:
        return (
            f"[Performance] Uptime (secs): {stats.uptime} "
            f"Frames: {stats.frames} FPS: {stats.fps}"
        )

    raise ValueError(f"unknown bar kind (programming error): {bar.kind!r}")

#!/usr/bin/env python3

# Copyright (c) 2026 termview contributors
# SPDX-License-Identifier: ISC

"""
Overview
========

A terminal text viewer built on rawterm (pure-Python terminal I/O). The file
is shown in a content area with status bars below it. Long lines are clipped,
not wrapped. Moving the cursor past the right edge scrolls the text one
column at a time while the line under the cursor has more to show.

Keys, with Vi-style alternatives:

  h/Left, l/Right  : Move the cursor one column
  k/Up, j/Down     : Move the cursor one row
  Ctrl-U/PgUp      : Move the cursor up a page
  Ctrl-D/PgDn      : Move the cursor down a page
  0/Home           : Move the cursor to the first column
  $/End            : Move the cursor to the last column
  g                : Scroll back to the start of the text
  r                : Reload the file (the cursor stays where it is)
  q/Esc            : Quit


Running
=======

  $ termview [--bars KINDS] [--poll-ms MS] [FILE]

With no FILE, an empty viewer with the title line is shown.

--bars takes a comma-separated list of status bars to show, from top to
bottom: editor-info, status, performance. Pass an empty string for no bars.
The default is "editor-info,status".

The exit status on errors is 1.


Other features
==============

  - Resizing the terminal resizes the content area. The cursor is pulled back
    inside it right away.

  - The bars show the uptime, frame count and average frames per second. The
    screen is redrawn every --poll-ms milliseconds (default 17) even when no
    key is pressed.


Color schemes
=============

The TERMVIEW_STYLE environment variable can be used to change the colors,
using the same syntax as menuconfig's MENUCONFIG_STYLE. It is a space-separated
list of <element>=<style> assignments and template names:

  TERMVIEW_STYLE="monochrome bar=fg:black,bg:#00AAFF"

Elements:

  text   Content lines
  tilde  The "~" shown on rows past the end of the text
  title  Title line shown when no file is open
  bar    Status bars

A style is a comma-separated list of fg:COLOR, bg:COLOR, bold, standout and
underline. COLOR is a color name (black, red, green, yellow, blue, magenta,
cyan, white, optionally prefixed with "bright"), a 256-color palette index
(0-255), or an #RRGGBB value.

Templates: default, monochrome
"""

import argparse
import locale
import os
import re
import sys

import rawterm
from rawterm import Key, Style, Color, NAMED_COLORS

from bars import DEFAULT_BARS, parse_bars, render_bar, sorted_bars
from cursorfield import CursorField
from framestats import FrameStats
from viewport import Viewport

_IS_WINDOWS = os.name == "nt"

#
# Configuration variables
#

# If True, try to change LC_CTYPE to a UTF-8 locale if it is set to the C
# locale (which implies ASCII)
_CHANGE_C_LC_CTYPE_TO_UTF8 = True

# How long to wait for a key before redrawing anyway, in milliseconds
_POLL_MS = 17

# Shown on the first row when no file is open
_TITLE = "termview -- a terminal text viewer (press q to quit)"

_STYLES = {
    "default": """
    text=
    tilde=fg:blue,bold
    title=bold
    bar=fg:white,bg:black
    """,
    # Also forced when NO_COLOR is set
    "monochrome": """
    text=
    tilde=
    title=bold
    bar=standout
    """,
}


def _parse_color(color_def):
    # HTML format, #RRGGBB
    if re.match("^#[A-Fa-f0-9]{6}$", color_def):
        return Color.rgb(
            int(color_def[1:3], 16),
            int(color_def[3:5], 16),
            int(color_def[5:7], 16),
        )

    if color_def in NAMED_COLORS:
        return NAMED_COLORS[color_def]

    try:
        num = int(color_def, 0)
    except ValueError:
        _warn("Ignoring color", color_def, "that's neither predefined nor a number")
        return Color.DEFAULT

    if 0 <= num <= 255:
        return Color.index(num)

    _warn(f"Ignoring color {color_def} outside range 0..255")
    return Color.DEFAULT


def _style_from_def(style_def):
    """Parse a style definition such as "fg:white,bg:blue,bold"."""
    fg = Color.DEFAULT
    bg = Color.DEFAULT
    attrs = {"bold": False, "standout": False, "underline": False}

    for field in filter(None, style_def.split(",")):
        if field.startswith("fg:"):
            fg = _parse_color(field[3:])
        elif field.startswith("bg:"):
            bg = _parse_color(field[3:])
        elif field in attrs:
            # Windows consoles render bold as a different color
            attrs[field] = field != "bold" or not _IS_WINDOWS
        else:
            _warn("Ignoring unknown style attribute", field)

    return Style(fg=fg, bg=bg, **attrs)


def _parse_style(style_str, parsing_default):
    # Parses '<element>=<style>' assignments and template names. A template
    # name is treated as if its assignments were inserted at that point.
    #
    # parsing_default is True while parsing the built-in base template, to
    # prevent warnings about elements that don't exist yet.

    for sline in style_str.split():
        if "=" in sline:
            key, data = sline.split("=", 1)

            if key not in _style and not parsing_default:
                _warn("Ignoring non-existent style", key)
                continue

            # A reference to another element copies its style
            if data in _style:
                _style[key] = _style[data]
            else:
                _style[key] = _style_from_def(data)

        elif sline in _STYLES:
            _parse_style(_STYLES[sline], parsing_default)

        else:
            _warn("Ignoring non-existent style template", sline)


# Element name -> rawterm.Style
_style = {}


def _init_styles():
    _style.clear()
    _parse_style("monochrome" if "NO_COLOR" in os.environ else "default", True)
    if "TERMVIEW_STYLE" in os.environ:
        _parse_style(os.environ["TERMVIEW_STYLE"], False)


#
# Main application
#


def _main():
    parser = argparse.ArgumentParser(
        prog="termview",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=__doc__,
    )

    parser.add_argument(
        "--bars",
        help="Comma-separated status bars to show, top to bottom "
        "(default: editor-info,status)",
    )

    parser.add_argument(
        "--poll-ms",
        type=int,
        default=_POLL_MS,
        help=f"Milliseconds to wait for a key before redrawing (default: {_POLL_MS})",
    )

    parser.add_argument("file", metavar="FILE", nargs="?", help="Text file to view")

    args = parser.parse_args()

    if args.poll_ms <= 0:
        sys.exit(f"error: --poll-ms must be positive, got {args.poll_ms}")

    bars = None
    if args.bars is not None:
        try:
            bars = parse_bars(args.bars)
        except ValueError as e:
            sys.exit(f"error: {e}")

    termview(args.file, bars=bars, poll_ms=args.poll_ms)


def termview(filename=None, headless=False, bars=None, poll_ms=_POLL_MS):
    """
    Opens 'filename' in the viewer and returns after the user quits.

    filename:
      File to show, or None for an empty viewer. Exits with an error message
      if the file can't be read.

    headless:
      If True, load the file and return the CursorField without touching the
      terminal. Useful for testing.

    bars:
      List of bars.Bar to show. Defaults to bars.DEFAULT_BARS.

    poll_ms:
      Milliseconds to wait for a key before redrawing
    """
    global _file_path
    global _field
    global _stats
    global _bars
    global _poll_ms
    global _term

    _file_path = filename
    _bars = sorted_bars(DEFAULT_BARS if bars is None else bars)
    _poll_ms = poll_ms
    _stats = FrameStats()
    _field = CursorField(Viewport())

    if filename is not None:
        try:
            _field.load(_read_file(filename))
        except OSError as e:
            sys.exit(f"error: couldn't read '{filename}': {e.strerror}")

    if headless:
        return _field

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        locale.setlocale(locale.LC_ALL, "C")

    if _CHANGE_C_LC_CTYPE_TO_UTF8:
        _change_c_lc_ctype_to_utf8()

    # _termview() returns a string to print on exit
    res = rawterm.run(_termview)
    _term = None
    if res:
        print(res)

    return _field


def _read_file(filename):
    # Undecodable bytes are shown as U+FFFD rather than refusing the file
    with open(filename, encoding="utf-8", errors="replace") as f:
        return f.read()


# Global variables used below:
#
#   _term:
#     rawterm.Terminal instance, or anything with the same drawing and input
#     methods
#
#   _field:
#     CursorField with the file contents, bounded by the content area
#
#   _stats:
#     FrameStats shown in the bars
#
#   _bars:
#     List of bars.Bar, in drawing order
#
#   _file_path:
#     Path of the open file, or None
#
#   _poll_ms:
#     Key poll timeout

_term = None


def _termview(term):
    # Runs the event loop until the user quits. Returns a message to print on
    # exit.

    global _term

    _term = term

    _init_styles()
    _term.show_cursor()
    _resize_main()

    while True:
        _draw_main()
        _term.update()

        c = _term.read_key(_poll_ms / 1000)
        if c is not None and not _handle_key(c):
            return _exit_message()

        _stats.tick()


def _handle_key(c):
    # Applies the command bound to key 'c'. Returns False if the user wants
    # to quit.

    if c == Key.RESIZE:
        _resize_main()

    elif c in (Key.LEFT, "h"):
        _field.move_left(1)

    elif c in (Key.RIGHT, "l"):
        _field.move_right(1)

    elif c in (Key.UP, "k"):
        _field.move_up(1)

    elif c in (Key.DOWN, "j"):
        _field.move_down(1)

    elif c in (Key.PAGE_UP, "\x15"):  # Page Up/Ctrl-U
        _field.move_up(_page_rows())

    elif c in (Key.PAGE_DOWN, "\x04"):  # Page Down/Ctrl-D
        _field.move_down(_page_rows())

    elif c in (Key.HOME, "0"):
        _field.move_left(_field.viewport.columns)

    elif c in (Key.END, "$"):
        _field.move_right(_field.viewport.columns)

    elif c == "g":
        _field.scroll_to(0, 0)

    elif c == "r":
        _reload()

    elif c in ("q", "Q", "\x1b"):
        return False

    return True


def _page_rows():
    # Distance moved by Page Up/Down. Never 0, so the keys always move.
    return max(_field.viewport.rows, 1)


def _reload():
    # Re-reads the open file. The cursor and scroll offset are kept.

    if _file_path is None:
        return

    try:
        content = _read_file(_file_path)
    except OSError as e:
        _warn(f"Couldn't reload '{_file_path}': {e.strerror}")
        return

    _field.load(content)


def _resize_main():
    # Gives the content area everything except the bar rows, and pulls the
    # cursor back inside it before it is drawn again

    _field.resize(_term.width, max(_term.height - len(_bars), 0))
    _field.clamp()


def _draw_main():
    # Draws the content area, the bars, and places the cursor

    _term.clear()

    rows = _field.viewport.rows

    if not _field.is_loaded():
        _term.write(0, 0, _TITLE, _style["title"])
    else:
        n_lines = 0
        for row_ix, line in enumerate(_field.visible_lines()):
            _term.write(row_ix, 0, line, _style["text"])
            n_lines += 1

        # Mark rows past the end of the text, like vi
        for row_ix in range(n_lines, rows):
            _term.write(row_ix, 0, "~", _style["tilde"])

    for i, bar in enumerate(_bars):
        _term.fill_row(rows + i, _style["bar"])
        _term.write(rows + i, 0, render_bar(bar, _field, _stats, _file_path), _style["bar"])

    column_ix, row_ix = _field.cursor_screen_position()
    _term.set_cursor(row_ix, column_ix)


def _exit_message():
    if _file_path is None:
        return None
    return f"Viewed '{_file_path}' for {_stats.uptime} seconds"


def _warn(*args):
    # Temporarily exits terminal mode and prints a warning to stderr. The
    # warning would get lost in terminal mode.
    if _term is not None:
        _term.suspend()
    print("termview warning: ", end="", file=sys.stderr)
    print(*args, file=sys.stderr)
    if _term is not None:
        _term.resume()


def _change_c_lc_ctype_to_utf8():
    # See _CHANGE_C_LC_CTYPE_TO_UTF8

    if _IS_WINDOWS:
        return

    def try_set_locale(loc):
        try:
            locale.setlocale(locale.LC_CTYPE, loc)
            return True
        except locale.Error:
            return False

    if locale.setlocale(locale.LC_CTYPE) == "C":
        # Taken from the PEP 538 implementation, in Python/pylifecycle.c
        for loc in "C.UTF-8", "C.utf8", "UTF-8":
            if try_set_locale(loc):
                return


if __name__ == "__main__":
    _main()

#!/usr/bin/env python3

# Copyright (c) 2026 termview contributors
# SPDX-License-Identifier: ISC

"""
rawterm -- pure-Python terminal I/O for termview

The terminal side of the viewer: alternate screen and cbreak mode, a screen
frame buffer that is diffed against the previous frame on update(), styled
text output, cursor placement, resize tracking, and keyboard input with a
poll timeout so the caller's loop keeps ticking while no key is pressed.

Every character occupies exactly one cell. Control characters are drawn as
spaces.

Zero external dependencies. Uses only Python stdlib: termios, select,
signal, shutil, os, sys, codecs on Unix; ctypes and msvcrt on Windows.

Platform support:
  - Unix (Linux, macOS): termios cbreak mode, poll(2)-based input
  - Windows 10 build 1511+: VT100 output and VT100 input via SetConsoleMode

Minimum: Python 3.6+, any VT100-capable terminal.
"""

import atexit
import codecs
import os
import shutil
import signal
import sys
import time

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import select
    import termios


# How long to wait for the rest of an escape sequence before treating ESC as
# a key of its own, in milliseconds
_ESC_TIMEOUT_MS = 25


# ---------------------------------------------------------------------------
# Colors and styles
# ---------------------------------------------------------------------------


class Color:
    """Terminal color: default, named (0-15), 256-color index, or 24-bit RGB."""

    __slots__ = ("_kind", "_value")

    def __init__(self, kind, value):
        # kind: "default", "named", "index", "rgb"
        self._kind = kind
        self._value = value

    @staticmethod
    def named(n):
        """Create one of the 16 standard colors (8-15 are the bright ones)."""
        return Color("named", n)

    @staticmethod
    def index(n):
        """Create a color from the xterm 256-color palette."""
        return Color("index", n)

    @staticmethod
    def rgb(r, g, b):
        """Create a 24-bit RGB color."""
        return Color("rgb", (r, g, b))

    def sgr_params(self, background):
        """Return the SGR parameters selecting this color."""
        if self._kind == "default":
            return "49" if background else "39"
        if self._kind == "named":
            base = (100 if background else 90) if self._value >= 8 else (40 if background else 30)
            return str(base + self._value % 8)
        prefix = "48" if background else "38"
        if self._kind == "index":
            return f"{prefix};5;{self._value}"
        return "{};2;{};{};{}".format(prefix, *self._value)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self._kind == other._kind and self._value == other._value

    def __hash__(self):
        return hash((self._kind, self._value))

    def __repr__(self):
        if self._kind == "default":
            return "Color.DEFAULT"
        return f"Color({self._kind!r}, {self._value!r})"


Color.DEFAULT = Color("default", None)

# Curses-style color names, as accepted in style strings
NAMED_COLORS = {}
for _i, _name in enumerate(
    ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
):
    NAMED_COLORS[_name] = Color.named(_i)
    NAMED_COLORS["bright" + _name] = Color.named(_i + 8)
NAMED_COLORS["purple"] = NAMED_COLORS["magenta"]
NAMED_COLORS["brightpurple"] = NAMED_COLORS["brightmagenta"]
del _i, _name


class Style:
    """Immutable style combining foreground, background, and attributes."""

    __slots__ = ("fg", "bg", "bold", "standout", "underline", "_sgr")

    def __init__(self, fg=None, bg=None, bold=False, standout=False, underline=False):
        self.fg = fg if fg is not None else Color.DEFAULT
        self.bg = bg if bg is not None else Color.DEFAULT
        self.bold = bold
        self.standout = standout
        self.underline = underline

        params = ["0", self.fg.sgr_params(False), self.bg.sgr_params(True)]
        if bold:
            params.append("1")
        if underline:
            params.append("4")
        if standout:
            params.append("7")
        self._sgr = "\x1b[{}m".format(";".join(params))

    def sgr(self):
        """Return the SGR escape sequence selecting this style."""
        return self._sgr

    def _key(self):
        return (self.fg, self.bg, self.bold, self.standout, self.underline)

    def __eq__(self, other):
        if not isinstance(other, Style):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        parts = []
        if self.fg != Color.DEFAULT:
            parts.append(f"fg={self.fg}")
        if self.bg != Color.DEFAULT:
            parts.append(f"bg={self.bg}")
        for attr in ("bold", "standout", "underline"):
            if getattr(self, attr):
                parts.append(attr)
        return "Style({})".format(", ".join(parts))


# Terminal defaults, no attributes
STYLE_DEFAULT = Style()


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class Key:
    """Named constants for special keys."""

    UP = "key_up"
    DOWN = "key_down"
    LEFT = "key_left"
    RIGHT = "key_right"
    PAGE_UP = "key_page_up"
    PAGE_DOWN = "key_page_down"
    HOME = "key_home"
    END = "key_end"
    BACKSPACE = "key_backspace"
    DELETE = "key_delete"
    RESIZE = "key_resize"


# Several entries per key to cover xterm, rxvt, tmux and application mode
_ESCAPE_SEQUENCES = {
    "\x1b[A": Key.UP,
    "\x1bOA": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1bOB": Key.DOWN,
    "\x1b[C": Key.RIGHT,
    "\x1bOC": Key.RIGHT,
    "\x1b[D": Key.LEFT,
    "\x1bOD": Key.LEFT,
    "\x1b[5~": Key.PAGE_UP,
    "\x1b[6~": Key.PAGE_DOWN,
    "\x1b[H": Key.HOME,
    "\x1bOH": Key.HOME,
    "\x1b[1~": Key.HOME,
    "\x1b[7~": Key.HOME,
    "\x1b[F": Key.END,
    "\x1bOF": Key.END,
    "\x1b[4~": Key.END,
    "\x1b[8~": Key.END,
    "\x1b[3~": Key.DELETE,
}


def _build_trie(sequences):
    # Nested dicts keyed by character; leaves are Key constants
    root = {}
    for seq, key in sequences.items():
        node = root
        for ch in seq[:-1]:
            node = node.setdefault(ch, {})
        node[seq[-1]] = key
    return root


_ESCAPE_TRIE = _build_trie(_ESCAPE_SEQUENCES)


class KeyParser:
    """
    Turns a stream of decoded characters into keys.

    feed() returns a Key constant or a str character once a key is complete,
    and None while in the middle of an escape sequence. When no more input
    arrives within the escape timeout, the reader calls flush() to get the
    ESC back as a key of its own.
    """

    def __init__(self):
        self._node = None
        self._pending = None

    def in_sequence(self):
        """True if a partial escape sequence is buffered."""
        return self._node is not None

    def pop_pending(self):
        """Return and forget a key left over from a broken escape sequence."""
        pending, self._pending = self._pending, None
        return pending

    def feed(self, ch):
        if self._node is None:
            return self._feed_plain(ch)

        if ch not in self._node:
            # Not a known sequence. Report the ESC, keep ch for the next
            # read.
            self._node = None
            self._pending = self._feed_plain(ch)
            return "\x1b"

        val = self._node[ch]
        if isinstance(val, dict):
            self._node = val
            return None

        self._node = None
        return val

    def flush(self):
        if self._node is None:
            return None
        self._node = None
        return "\x1b"

    def _feed_plain(self, ch):
        if ch == "\x1b":
            self._node = _ESCAPE_TRIE["\x1b"]
            return None

        if ch == "\x7f":
            return Key.BACKSPACE

        # Callers check "\n" for Enter
        if ch == "\r":
            return "\n"

        return ch


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _cell_char(ch):
    # Anything that would move the terminal cursor is drawn as a space
    o = ord(ch)
    if o < 0x20 or o == 0x7F:
        return " "
    return ch


def _blank_frame(height, width):
    blank = (" ", STYLE_DEFAULT)
    return [[blank] * width for _ in range(height)]


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------


class Terminal:
    """Manages terminal state, the screen frame buffer, and input."""

    def __init__(self):
        if not os.isatty(sys.stdin.fileno()):
            raise RuntimeError("stdin is not a terminal")
        if not os.isatty(sys.stdout.fileno()):
            raise RuntimeError("stdout is not a terminal")

        self._suspended = False
        self._resize_pending = False
        self._parser = KeyParser()
        self._decoder = codecs.getincrementaldecoder("utf-8")("replace")

        self._cursor_visible = False
        self._cursor_y = 0
        self._cursor_x = 0

        sz = shutil.get_terminal_size()
        self._width = sz.columns
        self._height = sz.lines
        self._frame = _blank_frame(self._height, self._width)
        self._prev_frame = None

        if _IS_WINDOWS:
            self._init_windows()
        else:
            self._init_unix()

        self._enter()

    def _init_unix(self):
        fd = sys.stdin.fileno()
        self._old_termios = termios.tcgetattr(fd)
        self._set_cbreak()

        self._old_sigwinch = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._sigwinch_handler)

        self._poller = select.poll()
        self._poller.register(fd, select.POLLIN)

    @staticmethod
    def _set_cbreak():
        # No echo, no line buffering, no flow control, no CR translation.
        # ISIG stays on so that Ctrl-C still raises KeyboardInterrupt.
        fd = sys.stdin.fileno()
        attrs = termios.tcgetattr(fd)
        attrs[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
        attrs[1] &= ~(
            termios.IXON | termios.IXOFF | termios.ICRNL | termios.INLCR | termios.IGNCR
        )
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, attrs)

    def _init_windows(self):
        import ctypes
        from ctypes import wintypes

        kernel32 = ctypes.windll.kernel32
        self._kernel32 = kernel32
        self._stdin_handle = kernel32.GetStdHandle(-10)
        self._stdout_handle = kernel32.GetStdHandle(-11)

        self._old_out_mode = wintypes.DWORD()
        kernel32.GetConsoleMode(self._stdout_handle, ctypes.byref(self._old_out_mode))
        self._old_in_mode = wintypes.DWORD()
        kernel32.GetConsoleMode(self._stdin_handle, ctypes.byref(self._old_in_mode))

        # ENABLE_VIRTUAL_TERMINAL_PROCESSING
        kernel32.SetConsoleMode(self._stdout_handle, self._old_out_mode.value | 0x0004)

        # ENABLE_VIRTUAL_TERMINAL_INPUT, minus ECHO, LINE and PROCESSED input
        new_in = (self._old_in_mode.value | 0x0200) & ~(0x0004 | 0x0002 | 0x0001)
        if not kernel32.SetConsoleMode(self._stdin_handle, new_in):
            raise RuntimeError("console does not support VT100 input")

    def _enter(self):
        # Alternate screen, hidden cursor
        self._write_raw("\x1b[?1049h\x1b[?25l")
        self._flush()

    def _leave(self):
        # Visible cursor, main screen, default attributes
        self._write_raw("\x1b[?25h\x1b[?1049l\x1b[0m")
        self._flush()

    def close(self):
        """Restore terminal state."""
        self._leave()

        if _IS_WINDOWS:
            self._kernel32.SetConsoleMode(self._stdout_handle, self._old_out_mode)
            self._kernel32.SetConsoleMode(self._stdin_handle, self._old_in_mode)
        else:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSANOW, self._old_termios)
            signal.signal(signal.SIGWINCH, self._old_sigwinch)

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    def suspend(self):
        """Temporarily leave terminal mode, e.g. to print to stderr."""
        self._suspended = True
        self._leave()
        if not _IS_WINDOWS:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSANOW, self._old_termios)

    def resume(self):
        """Re-enter terminal mode after suspend()."""
        if not _IS_WINDOWS:
            self._set_cbreak()
        self._enter()
        self._suspended = False

        # The size might have changed while suspended. Queue a resize so that
        # the caller relayouts, and repaint everything.
        self._resize_pending = True
        self._prev_frame = None

    # --- Resize ---

    def _sigwinch_handler(self, signum, frame):
        # Only set a flag. The resize is picked up between frames.
        self._resize_pending = True

    def _check_resize(self):
        if not self._resize_pending:
            return False

        self._resize_pending = False
        sz = shutil.get_terminal_size()
        self._width = sz.columns
        self._height = sz.lines
        self._frame = _blank_frame(self._height, self._width)
        self._prev_frame = None

        # Terminal emulators may garble the alternate screen on resize
        self._write_raw("\x1b[2J")
        self._flush()
        return True

    # --- Output ---

    def clear(self):
        """Blank the frame buffer. Nothing is drawn until update()."""
        self._frame = _blank_frame(self._height, self._width)

    def write(self, y, x, text, style=None):
        """
        Write text at screen row y, column x. Text running past the right
        edge is clipped. Returns the number of cells written.
        """
        if style is None:
            style = STYLE_DEFAULT
        if y < 0 or y >= self._height or x < 0 or x >= self._width:
            return 0

        row = self._frame[y]
        text = text[: self._width - x]
        for i, ch in enumerate(text):
            row[x + i] = (_cell_char(ch), style)
        return len(text)

    def fill_row(self, y, style):
        """Set every cell of row y to a blank in 'style'."""
        if 0 <= y < self._height:
            self._frame[y] = [(" ", style)] * self._width

    def hide_cursor(self):
        self._cursor_visible = False

    def show_cursor(self):
        self._cursor_visible = True

    def set_cursor(self, y, x):
        """Place the cursor at screen row y, column x."""
        self._cursor_y = y
        self._cursor_x = x

    def update(self):
        """
        Flush the frame buffer to the terminal. Only cells that differ from
        the previous frame are sent.
        """
        if self._suspended:
            return

        buf = []
        prev = self._prev_frame
        last_style = None

        for y, row in enumerate(self._frame):
            next_x = -1
            for x, cell in enumerate(row):
                if prev is not None and prev[y][x] == cell:
                    continue

                ch, style = cell
                if x != next_x:
                    buf.append(f"\x1b[{y + 1};{x + 1}H")
                if style != last_style:
                    buf.append(style.sgr())
                    last_style = style
                buf.append(ch)
                next_x = x + 1

        if self._cursor_visible:
            buf.append(f"\x1b[{self._cursor_y + 1};{self._cursor_x + 1}H\x1b[?25h")
        else:
            buf.append("\x1b[?25l")

        self._write_raw("".join(buf))
        self._flush()

        self._prev_frame = [row[:] for row in self._frame]

    def _write_raw(self, s):
        # Caller must _flush()
        try:
            sys.stdout.buffer.write(s.encode("utf-8"))
        except OSError:
            pass

    def _flush(self):
        try:
            sys.stdout.buffer.flush()
        except OSError:
            pass

    # --- Input ---

    def read_key(self, timeout=None):
        """
        Return the next key: a Key constant or a str character. Key.RESIZE is
        returned after the terminal has been resized.

        timeout:
          Seconds to wait for a key. None waits forever. Returns None if no
          key arrived in time.
        """
        if self._suspended:
            raise RuntimeError("terminal is suspended")

        pending = self._parser.pop_pending()
        if pending is not None:
            return pending

        if self._check_resize():
            return Key.RESIZE

        if _IS_WINDOWS:
            return self._read_key_windows(timeout)
        return self._read_key_unix(timeout)

    def _read_key_unix(self, timeout):
        fd = sys.stdin.fileno()
        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            if deadline is None:
                ready = self._poller.poll()
            else:
                remaining_ms = max(0, int((deadline - time.monotonic()) * 1000))
                ready = self._poller.poll(remaining_ms)

            if self._check_resize():
                return Key.RESIZE

            if not ready:
                if deadline is not None and time.monotonic() >= deadline:
                    return None
                continue

            try:
                data = os.read(fd, 1024)
            except InterruptedError:
                continue

            for ch in self._decoder.decode(data):
                key = self._parser.feed(ch)
                if key is not None:
                    return key

            # Wait briefly for the rest of a partial escape sequence
            if self._parser.in_sequence() and not self._poller.poll(_ESC_TIMEOUT_MS):
                return self._parser.flush()

    def _read_key_windows(self, timeout):
        import msvcrt

        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            if msvcrt.kbhit():
                key = self._parser.feed(msvcrt.getwch())
                if key is not None:
                    return key
                continue

            if self._parser.in_sequence():
                return self._parser.flush()

            sz = shutil.get_terminal_size()
            if (sz.columns, sz.lines) != (self._width, self._height):
                self._resize_pending = True
            if self._check_resize():
                return Key.RESIZE

            if deadline is not None and time.monotonic() >= deadline:
                return None
            time.sleep(0.01)


# ---------------------------------------------------------------------------
# Safe entry point
# ---------------------------------------------------------------------------


def run(fn):
    """
    Init the terminal, call fn(terminal), and restore the terminal on exit.

    Ctrl-C (KeyboardInterrupt) ends fn quietly and returns None.
    """
    term = None
    try:
        term = Terminal()
        atexit.register(lambda: term.close() if term else None)
        return fn(term)
    except KeyboardInterrupt:
        pass
    finally:
        if term:
            term.close()
            term = None

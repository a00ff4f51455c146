# Copyright (c) 2026 termview contributors
# SPDX-License-Identifier: ISC

"""
Uptime and frame counters shown in the status bars.

The event loop calls tick() once per iteration. Nothing here is shared with
the CursorField; the bars read these numbers when they are rendered.
"""

import time


class FrameStats:
    """
    Counts frames and whole seconds of uptime.

    clock:
      Function returning the current time in seconds. Defaults to
      time.monotonic. Tests pass a fake clock.
    """

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._start = clock()
        self._uptime = 0
        self._frames = 0

    def tick(self):
        """Records one frame and updates the uptime."""
        self._uptime = int(self._clock() - self._start)
        self._frames += 1

    @property
    def frames(self):
        return self._frames

    @property
    def uptime(self):
        """Whole seconds since creation, as of the last tick()."""
        return self._uptime

    @property
    def fps(self):
        # Average over the whole run. 0 until a full second has passed.
        if self._uptime == 0:
            return 0
        return self._frames // self._uptime

    def __repr__(self):
        return f"FrameStats(uptime={self._uptime}, frames={self._frames})"

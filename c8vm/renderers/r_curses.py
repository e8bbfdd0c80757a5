#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the Framebuffer in a standard Linux-style TTY Terminal, the Windows
Command Prompt, or PowerShell, using inverted spaces to represent each lit
pixel.  The top line of the terminal is used as a title bar.

Terminal characters are roughly twice as tall as they are wide, so each
pixel is 'scale' characters wide (2 by default) to keep the aspect ratio.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase

DEFAULT_SCALE = 2


class Renderer(RendererBase):
    def __init__(self, scale=None, cursor_mode=0, **kwargs):
        if scale is None:
            scale = DEFAULT_SCALE

        self.pixel_char = " " * scale
        self.pad = None
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.cursor_mode = cursor_mode
        self.screen = curses.initscr()
        curses.curs_set(self.cursor_mode)
        curses.noecho()
        curses.cbreak()
        super().__init__(scale)

    def set_resolution(self, width, height):
        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  The extra line at the top is the title bar.
        self.pad = curses.newpad(height + 2, width * self.scale + 1)
        super().set_resolution(width, height)

    def render(self, framebuffer):
        pad = self.pad
        pixel_char = self.pixel_char
        scale = self.scale

        for y, row in enumerate(framebuffer.rows()):
            for x, pixel in enumerate(row):
                pad.addstr(y + 1, x * scale, pixel_char, curses.A_REVERSE if pixel else curses.A_NORMAL)

        self._refresh()

    def _refresh(self):
        screen_height, screen_width = self.screen.getmaxyx()  # This doesn't seem to ever change/work on Windows?!

        if screen_height != self.last_screen_height or screen_width != self.last_screen_width:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width

        self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)

    def set_title(self, title):
        if self.pad:
            title_width = self.width * self.scale
            self.pad.addstr(0, 0, title[:title_width].ljust(title_width), curses.A_REVERSE)
            self._refresh()

        super().set_title(title)

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except _curses.error:
                pass

        curses.endwin()
        super().shutdown()

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen

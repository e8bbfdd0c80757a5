#!/usr/bin/env python3

"""
Framebuffer Emulator

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method, and the only other way to
change the screen is to clear it.  Pixels are stored here as one byte each (0
or 1) in row-major order, with the origin in the top-left corner.

Rendering plugins do not get told about individual pixels.  They poll this
object once per frame, and only need to redraw if 'changed' is set.

Collisions (where any pixel was set, but was unset by an XOR), are reported
back to the caller.  Pixels which fall off the right or bottom edge of the
screen are clipped rather than wrapped.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.vram = memoryview(bytearray(self.vid_size))
        self.changed = True  # Force the first frame to be drawn

    def clear(self):
        self.vram[:] = bytes(self.vid_size)
        self.changed = True

    def xor_pixel(self, x, y):
        # Returns True on collision, False if not, or None if the pixel was clipped
        if x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.vram[vram_loc]
        self.vram[vram_loc] = pixel ^ 1
        self.changed = True

        return pixel != 0

    def draw_sprite_row(self, x, y, spr_data):
        # XOR an 8-pixel sprite row onto the screen.  Returns True if anything collided.
        collided = False

        for bit in range(8):
            if spr_data & (0x80 >> bit):
                if self.xor_pixel(x + bit, y):
                    # Don't stop drawing.  Set the flag, and never unset it for this row.
                    collided = True

        return collided

    def get_pixel(self, x, y):
        return self.vram[y * self.vid_width + x] != 0

    def rows(self):
        # Yields each row as a tuple of booleans, for renderers
        vid_width = self.vid_width

        for row_start in range(0, self.vid_size, vid_width):
            yield tuple(pixel != 0 for pixel in self.vram[row_start:row_start + vid_width])

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def snapshot(self):
        return bytes(self.vram)

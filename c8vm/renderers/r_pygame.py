#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the Framebuffer onto an SDL window surface via PyGame.  The surface is
allocated at the machine's native 64x32 resolution, and the contents are then
stretched (using 'Nearest Neighbour' translation) by the scale factor to fit
the window itself.  This means we don't have to draw the same pixel multiple
times.

Lit pixels are drawn in the foreground colour, and everything else in the
background colour.  Both can be set on the command line.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME, DEFAULT_BG_COLOUR, DEFAULT_FG_COLOUR

DEFAULT_SCALE = 20


def parse_colour(colour):
    if colour is None or len(colour) != 6:
        raise RendererError("Colours must all be 6 hex digits long.")

    try:
        rgb = int(colour, 16)
    except ValueError:
        raise RendererError("Invalid colour defined.") from None

    # Split compound RGB values for faster byte-based lookup later
    return bytes((rgb >> 16, (rgb >> 8) & 0xFF, rgb & 0xFF))


class Renderer(RendererBase):
    def __init__(self, scale=None, fg_colour=None, bg_colour=None, **kwargs):
        if scale is None:
            scale = DEFAULT_SCALE

        self.rgb_map = (
            parse_colour(DEFAULT_BG_COLOUR if bg_colour is None else bg_colour),
            parse_colour(DEFAULT_FG_COLOUR if fg_colour is None else fg_colour)
        )
        self.rgb_buffer = None
        self.display_surface = None
        pygame.display.init()
        super().__init__(scale)
        self.set_title(APP_NAME)

    def set_resolution(self, width, height):
        super().set_resolution(width, height)
        self.scaled_size = (width * self.scale, height * self.scale)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_buffer = memoryview(bytearray(self.rgb_map[0] * (width * height)))  # 24-bit

    def render(self, framebuffer):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_buffer = self.rgb_buffer
        rgb_map = self.rgb_map

        for location, pixel in enumerate(framebuffer.vram):
            rgb_location = location * 3
            rgb_buffer[rgb_location:rgb_location + 3] = rgb_map[pixel]

        # Blit the bytearray straight to the surface, then stretch it to the window
        render_surface = pygame.image.frombuffer(rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()

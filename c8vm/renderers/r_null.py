#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

Renderers pull from the Framebuffer once per frame rather than being told
about each pixel.  'draw' only calls 'render' if the Framebuffer has changed
since it was last drawn, so subclasses only need to override 'render'.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or for running the machine headless.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import VID_WIDTH, VID_HEIGHT


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.frames_drawn = 0
        self.title = ""
        self.set_resolution(VID_WIDTH, VID_HEIGHT)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def draw(self, framebuffer):
        if framebuffer.changed:
            self.render(framebuffer)
            framebuffer.changed = False
            self.frames_drawn += 1

    def render(self, framebuffer):  # pylint: disable=unused-argument
        pass

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass

#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.framebuffer import Framebuffer


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer(4, 5)

    def test_framebuffer_default_size(self):
        fb = Framebuffer()
        self.assertEqual((64, 32), fb.get_vid_size())
        self.assertEqual(64 * 32, len(fb.vram))

    def test_framebuffer_writes(self):
        fb = self.framebuffer
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("0100000000000000000000000000000000000000", fb.vram.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("0100000000010000000000000000000000000000", fb.vram.hex())
        self.assertTrue(fb.get_pixel(1, 1))
        self.assertFalse(fb.get_pixel(2, 1))

        # Collision turns the pixel off
        self.assertTrue(fb.xor_pixel(0, 0))
        self.assertEqual("0000000000010000000000000000000000000000", fb.vram.hex())

    def test_framebuffer_clipping(self):
        fb = self.framebuffer
        self.assertIsNone(fb.xor_pixel(4, 0))
        self.assertIsNone(fb.xor_pixel(0, 5))
        self.assertEqual("00" * 20, fb.vram.hex())

    def test_framebuffer_sprite_row(self):
        fb = self.framebuffer
        # Only the first 4 bits fit across the screen
        self.assertFalse(fb.draw_sprite_row(0, 2, 0b10101111))
        self.assertEqual((False, False, False, False), tuple(fb.rows())[1])
        self.assertEqual((True, False, True, False), tuple(fb.rows())[2])
        self.assertTrue(fb.draw_sprite_row(1, 2, 0b11000000))
        self.assertEqual((True, True, False, False), tuple(fb.rows())[2])

    def test_framebuffer_clear(self):
        fb = self.framebuffer
        fb.xor_pixel(3, 4)
        fb.changed = False
        fb.clear()
        self.assertTrue(fb.changed)
        self.assertEqual("00" * 20, fb.vram.hex())

    def test_framebuffer_changed_flag(self):
        fb = self.framebuffer
        fb.changed = False
        fb.xor_pixel(9, 9)
        self.assertFalse(fb.changed)
        fb.xor_pixel(1, 1)
        self.assertTrue(fb.changed)

    def test_framebuffer_snapshot(self):
        fb = self.framebuffer
        fb.xor_pixel(0, 0)
        snapshot = fb.snapshot()
        fb.xor_pixel(0, 0)
        self.assertEqual(1, snapshot[0])
        self.assertEqual(0, fb.vram[0])

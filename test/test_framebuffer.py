#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chipcore.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer()
        self.framebuffer_small = Framebuffer(4, 5)

    def test_framebuffer_init(self):
        self.assertEqual((64, 32), self.framebuffer.get_vid_size())
        self.assertEqual(64 * 32, len(self.framebuffer.vram))
        self.assertFalse(self.framebuffer.changed)
        self.assertFalse(self.framebuffer.cleared)
        self.assertRaises(FramebufferError, Framebuffer, 0, 32)

    def test_framebuffer_writes(self):
        fb = self.framebuffer_small
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("0100000000000000000000000000000000000000", fb.vram.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("0100000000010000000000000000000000000000", fb.vram.hex())
        self.assertTrue(fb.xor_pixel(4, 5))  # Wraps round to (0, 0) and erases it
        self.assertEqual("0000000000010000000000000000000000000000", fb.vram.hex())

    def test_framebuffer_wrap_both_axes(self):
        fb = self.framebuffer
        fb.xor_pixel(64 + 3, 32 + 2)
        self.assertEqual(1, fb.get_pixel(3, 2))
        fb.xor_pixel(-1, -1)
        self.assertEqual(1, fb.get_pixel(63, 31))

    def test_framebuffer_clear(self):
        fb = self.framebuffer_small
        fb.xor_pixel(2, 3)
        fb.clear()
        self.assertEqual("00" * 20, fb.vram.hex())
        self.assertTrue(fb.cleared)
        self.assertFalse(fb.changed)

    def test_framebuffer_acknowledge(self):
        fb = self.framebuffer_small
        fb.changed = True
        fb.clear()
        fb.acknowledge()
        self.assertFalse(fb.changed)
        self.assertFalse(fb.cleared)

    def test_framebuffer_rows(self):
        fb = self.framebuffer_small
        fb.xor_pixel(1, 0)
        fb.xor_pixel(3, 4)
        rows = fb.rows()
        self.assertEqual(5, len(rows))
        self.assertEqual((0, 1, 0, 0), rows[0])
        self.assertEqual((0, 0, 0, 0), rows[1])
        self.assertEqual((0, 0, 0, 1), rows[4])

    def test_framebuffer_get_pixel_out_of_range(self):
        self.assertRaises(FramebufferError, self.framebuffer_small.get_pixel, 4, 0)
        self.assertRaises(FramebufferError, self.framebuffer_small.get_pixel, 0, 5)

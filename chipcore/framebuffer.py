#!/usr/bin/env python3

"""
Framebuffer Emulator

Holds the 64x32 monochrome display, one byte per pixel.  Programs cannot write
into video memory directly.  Sprites are drawn by XORing pixels, and any set
pixel that gets erased is reported back as a collision.

Nothing here renders.  The host reads the pixels (usually at 60Hz) after
checking the flags:

    * changed - set when a sprite has been drawn
    * cleared - set when the screen has been cleared

Both stay set until the host calls acknowledge().
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, width=VID_WIDTH, height=VID_HEIGHT):
        if width <= 0 or height <= 0:
            raise FramebufferError("Display dimensions must be positive")

        self.vid_width = width
        self.vid_height = height
        self.vid_size = width * height
        self.vram = memoryview(bytearray(self.vid_size))
        self.changed = False
        self.cleared = False

    def clear(self):
        self.vram[:] = bytes(self.vid_size)
        self.cleared = True

    def xor_pixel(self, x, y):
        # Returns flagging any collision
        vram_loc = (y % self.vid_height) * self.vid_width + (x % self.vid_width)
        pixel = self.vram[vram_loc]
        self.vram[vram_loc] = pixel ^ 1

        return pixel != 0

    def get_pixel(self, x, y):
        if not (0 <= x < self.vid_width and 0 <= y < self.vid_height):
            raise FramebufferError("Pixel ({}, {}) is outside the display".format(x, y))

        return self.vram[y * self.vid_width + x]

    def rows(self):
        # Snapshot of the display as tuples of 0/1, top row first
        width = self.vid_width
        return [tuple(self.vram[y * width:(y + 1) * width]) for y in range(self.vid_height)]

    def acknowledge(self):
        self.changed = False
        self.cleared = False

    def get_vid_size(self):
        return self.vid_width, self.vid_height

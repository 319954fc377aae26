#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and a snapshot is handed to the host rendering system
once per frame.  The framebuffer itself knows nothing about windows, scaling or
colours, and holds no fading state: each pixel is simply on or off.

Unlike other computers, programs for this system cannot write directly into
video RAM.  Instead, sprites are drawn to the screen using an XOR method, and
the only other way to change the screen is to clear it.

Collisions (where any pixel was set, but was unset by an XOR), are reported.
The sprite's start position always wraps onto the screen, but the rest of the
sprite is trimmed at the right and bottom edges unless wrapping is allowed.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM

SPRITE_WIDTH = 8


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT, allow_wrapping=False):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Screen dimensions must be positive")

        self.allow_wrapping = allow_wrapping
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.ram_bank = RAM()
        self.ram_bank.resize(self.vid_size)

    def clear(self):
        self.ram_bank.clear()

    def xor_pixel(self, x, y):
        # Returns flagging any collision, or None if the pixel was off-screen

        if self.allow_wrapping:
            x %= self.vid_width
            y %= self.vid_height
        elif x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.ram_bank.read(vram_loc)
        self.ram_bank.write(vram_loc, pixel ^ 0xFF)

        return pixel != 0

    def draw_sprite(self, x, y, rows):
        # Rows are bytes, most significant bit leftmost.  Don't stop drawing on collision.
        vx_pos = x % self.vid_width
        vy_pos = y % self.vid_height
        collided = False

        for row_num, row in enumerate(rows):
            scr_y = vy_pos + row_num

            for bit in range(SPRITE_WIDTH):
                if row & (0x80 >> bit) and self.xor_pixel(vx_pos + bit, scr_y):
                    collided = True

        return collided

    def get_pixel(self, x, y):
        return self.ram_bank.read(y * self.vid_width + x) != 0

    def snapshot(self):
        # Read-only copy for the presentation layer, indexed [y][x]
        mem = self.ram_bank.mem
        width = self.vid_width

        return tuple(
            tuple(pixel != 0 for pixel in mem[row:row + width])
            for row in range(0, self.vid_size, width)
        )

    def get_vid_size(self):
        return self.vid_width, self.vid_height

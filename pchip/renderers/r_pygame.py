#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws framebuffer snapshots onto an SDL window surface via PyGame.  The surface
is allocated at the emulated screen size, and then the contents are stretched
(in the correct aspect ratio using 'Nearest Neighbour' translation) to fit the
window itself.  This means we don't have to draw the same pixel multiple times.

Old CRT-style displays didn't switch pixels off instantly, and many programs
flicker badly without that.  So, pixels that go out fade down to the background
colour over a few frames, instead of vanishing.  The fade only exists here: the
framebuffer is strictly on or off.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import Renderer as RendererBase
from ..constants import APP_NAME

BACKGROUND_COLOUR = 0x222222
FOREGROUND_COLOUR = 0xDDDDDD
FADE_LEVELS = 8  # Number of frames taken for a pixel to fade out


class Renderer(RendererBase):
    def __init__(self, scale=None, fade=True, **kwargs):
        if scale is None:
            scale = 1024  # Default window width if not supplied, or set to default

        super().__init__(scale)
        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.fade_step = 0xFF // FADE_LEVELS if fade else 0xFF

        # Brightness of each pixel.  255 is lit, 0 is fully faded.
        total_pixels = self.width * self.height
        self.intensity = bytearray(total_pixels)
        self.rgb_buffer = memoryview(bytearray(total_pixels * 3))  # 24-bit

        # Pre-blend every brightness level for fast byte-based lookup later
        self.rgb_map = [self._blend(level) for level in range(0x100)]

    def _blend(self, level):
        rgb = bytearray(3)

        for channel, shift in enumerate((16, 8, 0)):
            bg = (BACKGROUND_COLOUR >> shift) & 0xFF
            fg = (FOREGROUND_COLOUR >> shift) & 0xFF
            rgb[channel] = bg + ((fg - bg) * level) // 0xFF

        return bytes(rgb)

    def refresh_display(self, pixels):
        intensity = self.intensity
        rgb_buffer = self.rgb_buffer
        rgb_map = self.rgb_map
        fade_step = self.fade_step
        location = 0

        # Update RGB buffer in-place to minimise allocations and PyGame calls
        for row in pixels:
            for pixel in row:
                if pixel:
                    level = 0xFF
                else:
                    level = max(0, intensity[location] - fade_step)

                intensity[location] = level
                rgb_location = location * 3
                rgb_buffer[rgb_location:rgb_location + 3] = rgb_map[level]
                location += 1

        # Blit the bytearray straight to the surface, rather than drawing each pixel
        render_surface = pygame.image.frombuffer(rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()
        super().refresh_display(pixels)

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()

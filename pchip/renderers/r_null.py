#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or for running the emulator headless.  Without a renderer,
performance data will also not be shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import VID_WIDTH, VID_HEIGHT


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.width = VID_WIDTH
        self.height = VID_HEIGHT
        self.frames_shown = 0

    def refresh_display(self, pixels):  # pylint: disable=unused-argument
        # Pixels are a read-only framebuffer snapshot, indexed [y][x]
        self.frames_shown += 1

    def set_title(self, title):
        pass

    def shutdown(self):
        pass

#!/usr/bin/env python3

"""
Timer Emulator

The delay and sound timers count down at 60Hz, regardless of how many
instructions the CPU manages in that time.  The host calls 'tick' once per
frame, and programs can only set the timers or read back the delay timer.

While the sound timer is above zero, the buzzer should sound.  There is no
audio output, so this is only reported.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Timers:
    def __init__(self):
        self.reset()

    def reset(self):
        self.delay = 0  # Delay timer integer (byte)
        self.sound = 0  # Sound timer integer (byte)

    def tick(self):
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1

    def set_delay(self, value):
        self.delay = value & 0xFF

    def set_sound(self, value):
        self.sound = value & 0xFF

    def is_sound_active(self):
        return self.sound > 0

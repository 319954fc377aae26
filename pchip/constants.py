#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "PlainChip Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000
FONT_LOC = 0x50
PROGRAM_LOC = 0x200
MAX_PROGRAM_SIZE = MEM_SIZE - PROGRAM_LOC  # 3584 bytes
FONT_GLYPH_SIZE = 5

# Call stack depth
STACK_SIZE = 16

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Timing
DEFAULT_CLOCK_SPEED = 700  # Instructions per second
TIMER_FREQ = 60.0          # 60Hz timer and display refresh

# Interpreter modes
MODE_RUNNING = "running"
MODE_BLOCKED = "blocked"

# The keypad is a 4x4 grid.  Each host key sits in the same grid position as the CHIP-8 key it maps to.  Keyscans on a
# QWERTY keyboard are the same codes as the lowercase ASCII characters.
KEYPAD_LAYOUT = (
    (0x1, 0x2, 0x3, 0xC),
    (0x4, 0x5, 0x6, 0xD),
    (0x7, 0x8, 0x9, 0xE),
    (0xA, 0x0, 0xB, 0xF)
)
HOST_KEY_LAYOUT = ("1234", "qwer", "asdf", "zxcv")
DEFAULT_KEYMAP = {
    ord(host_key): hex_key
    for host_row, hex_row in zip(HOST_KEY_LAYOUT, KEYPAD_LAYOUT)
    for host_key, hex_key in zip(host_row, hex_row)
}

# CPU quirks.  All disabled gives COSMAC VIP shifts, V0 jumps, a fixed index register after loads and stores, untouched
# Vf after logic operations, silent index overflow, and clipped sprites.
CPU_QUIRKS = ["shift", "jump", "load", "logic", "index_overflow", "screen_wrap"]
DEFAULT_QUIRKS = {"{}_quirks".format(quirk): False for quirk in CPU_QUIRKS}

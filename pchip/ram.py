#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, as well
as zeroing of memory blocks.  Every access is bounds checked, since a ROM
reaching outside the 4K address space is a fault, not something to wrap.

The interpreter-specific loaders (font and program) also live here.  Programs
are checked for size before anything is written, so a failed load leaves the
memory exactly as it was.

Nothing stops a running program from writing below 0x200.  The original
hardware never protected that region either.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import FONT_LOC, PROGRAM_LOC, MAX_PROGRAM_SIZE

CPU_ENDIAN = "big"  # CHIP-8 is big-endian


class RAMError(Exception):
    pass


class OutOfBoundsAccess(RAMError):
    def __init__(self, location):
        self.location = location
        super().__init__("Memory access at 0x{:04x} is out of bounds".format(location))


class RomLoadError(Exception):
    pass


class RomTooLarge(RomLoadError):
    def __init__(self, size):
        self.size = size
        super().__init__(
            "ROM is {} bytes, which exceeds the {} bytes available from 0x{:03x}".format(
                size, MAX_PROGRAM_SIZE, PROGRAM_LOC
            )
        )


class RAM:
    def __init__(self):
        self.resize(0)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location)
        self.check_overflow(location + size - 1)
        return self.mem[location:location + size]

    def read_opcode(self, location):
        # Both bytes of the instruction must be addressable
        return int.from_bytes(self.read_block(location, 2), CPU_ENDIAN, signed=False)

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(location)

        if block_size:
            self.check_overflow(block_top - 1)

        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise OutOfBoundsAccess(location)

    def load_font(self, block):
        self.write_block(FONT_LOC, block)

    def load_program(self, block):
        if len(block) > MAX_PROGRAM_SIZE:
            raise RomTooLarge(len(block))

        self.write_block(PROGRAM_LOC, block)

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)

        for i in range(offset, block_top):
            self.mem[i] = 0x00

    def clear(self):
        self.zero_block(0, self.mem_size)

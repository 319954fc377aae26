#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The CPU
owns the RAM, stack, timers and framebuffer, and reads (but never writes) the
keypad.  It does no timing of its own: the host calls 'step' for each
instruction and 'tick_timers' once per 60Hz frame.

Each step fetches an opcode, moves the program counter on, decodes the opcode
into an Instruction, then looks up and runs the matching handler.  Handlers are
named after their opcode pattern.

The key wait instruction (Fx0A) doesn't block.  It puts the CPU into a waiting
mode instead, and each step made while waiting just checks the keypad and
returns, leaving the program counter on the Fx0A.  The host carries on ticking
timers and refreshing the display in the meantime.

Any fault (unknown opcode, stack overflow/underflow, out-of-bounds memory
access) is raised immediately.  Skipping a bad instruction would only hide the
problem.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import FONT_LOC, FONT_GLYPH_SIZE, PROGRAM_LOC, MODE_RUNNING, MODE_BLOCKED
from .decoder import CPUError, UnknownInstruction, Op, decode, disassemble  # noqa: F401
from .stack import StackOverflow, StackUnderflow
from .timers import Timers

I_BITMASK = 0xFFFF  # The index register is 16 bits wide, though only 12 bits can address RAM


class CPU:
    def __init__(self, ram, stack, framebuffer, keypad, debugger, shift_quirks=False, jump_quirks=False,
                 load_quirks=False, logic_quirks=False, index_overflow_quirks=False, screen_wrap_quirks=None):

        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()
        self.timers = Timers()

        """
        Quirks
        ------

        - Shift quirks          : Shift Vx in place, rather than shifting Vy into Vx.
        - Jump quirks           : Bxnn jumps to xnn + Vx, rather than nnn + V0.
        - Load quirks           : Fx55/Fx65 leave I pointing after the last register transferred.
        - Logic quirks          : 8xy1/8xy2/8xy3 reset Vf.
        - Index overflow quirks : Fx1E sets Vf when I passes the end of RAM.

        Screen wrapping is a property of the framebuffer, so screen_wrap_quirks is only accepted here so that a whole
        quirks dictionary can be passed in.  If supplied, it is applied to the framebuffer.
        """

        self.shift_quirks = shift_quirks
        self.jump_quirks = jump_quirks
        self.load_quirks = load_quirks
        self.logic_quirks = logic_quirks
        self.index_overflow_quirks = index_overflow_quirks

        if screen_wrap_quirks is not None:
            self.framebuffer.allow_wrapping = screen_wrap_quirks

        self.instructions = {
            Op.CLS:       self._00E0,
            Op.RET:       self._00EE,
            Op.JP:        self._1nnn,
            Op.CALL:      self._2nnn,
            Op.SE_BYTE:   self._3xkk,
            Op.SNE_BYTE:  self._4xkk,
            Op.SE_REG:    self._5xy0,
            Op.LD_BYTE:   self._6xkk,
            Op.ADD_BYTE:  self._7xkk,
            Op.LD_REG:    self._8xy0,
            Op.OR:        self._8xy1,
            Op.AND:       self._8xy2,
            Op.XOR:       self._8xy3,
            Op.ADD_REG:   self._8xy4,
            Op.SUB:       self._8xy5,
            Op.SHR:       self._8xy6,
            Op.SUBN:      self._8xy7,
            Op.SHL:       self._8xyE,
            Op.SNE_REG:   self._9xy0,
            Op.LD_I:      self._Annn,
            Op.JP_V0:     self._Bnnn,
            Op.RND:       self._Cxkk,
            Op.DRW:       self._Dxyn,
            Op.SKP:       self._Ex9E,
            Op.SKNP:      self._ExA1,
            Op.LD_VX_DT:  self._Fx07,
            Op.LD_VX_K:   self._Fx0A,
            Op.LD_DT_VX:  self._Fx15,
            Op.LD_ST_VX:  self._Fx18,
            Op.ADD_I_VX:  self._Fx1E,
            Op.LD_F_VX:   self._Fx29,
            Op.LD_B_VX:   self._Fx33,
            Op.LD_MEM_VX: self._Fx55,
            Op.LD_VX_MEM: self._Fx65
        }

        self.reset()

    def reset(self):
        # Restart the program.  RAM keeps the font and ROM.
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.i = 0  # Index register
        self.pc = PROGRAM_LOC
        self.debug_pc = PROGRAM_LOC
        self.opcode = 0
        self.stack.clear()
        self.timers.reset()
        self.framebuffer.clear()

        # Key wait state
        self.awaiting_keypress = False
        self.await_reg = 0

    @property
    def mode(self):
        return MODE_BLOCKED if self.awaiting_keypress else MODE_RUNNING

    def step(self):
        if self.awaiting_keypress:
            self._poll_keypress()
            return

        # Keep track of the program counter before altering it in any way, in case there is a crash
        self.debug_pc = self.pc
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute
        self.decode_exec()

    def tick_timers(self):
        self.timers.tick()

    def is_sound_active(self):
        return self.timers.is_sound_active()

    def fetch(self):
        return self.ram.read_opcode(self.pc)

    def decode_exec(self):
        instruction = decode(self.opcode, self.debug_pc)

        if self.live_debug:
            self.debug(disassemble(instruction))

        self.instructions[instruction.op](instruction)

    def inc_pc(self):
        # Not wrapped.  Running off the end of RAM is caught by the next fetch.
        self.pc += 2

    def dec_pc(self):
        # Only used to re-run the key wait instruction
        self.pc -= 2

    def debug(self, instruction_text):
        self.debugger.output(self, instruction_text)

    def _poll_keypress(self):
        key = self.keypad.get_keypress()

        if key is not None:
            self.v[self.await_reg] = key
            self.awaiting_keypress = False
            self.inc_pc()

    def _00E0(self, ins):  # CLS
        self.framebuffer.clear()

    def _00EE(self, ins):  # RET
        try:
            self.pc = self.stack.pop()
        except StackUnderflow:
            raise StackUnderflow(self.debug_pc) from None

    def _1nnn(self, ins):  # JP addr
        self.pc = ins.nnn

    def _2nnn(self, ins):  # CALL addr
        try:
            self.stack.push(self.pc)
        except StackOverflow:
            raise StackOverflow(self.debug_pc) from None

        self.pc = ins.nnn

    def _3xkk(self, ins):  # SE Vx, byte
        if self.v[ins.x] == ins.kk:
            self.inc_pc()

    def _4xkk(self, ins):  # SNE Vx, byte
        if self.v[ins.x] != ins.kk:
            self.inc_pc()

    def _5xy0(self, ins):  # SE Vx, Vy
        if self.v[ins.x] == self.v[ins.y]:
            self.inc_pc()

    def _6xkk(self, ins):  # LD Vx, byte
        self.v[ins.x] = ins.kk

    def _7xkk(self, ins):  # ADD Vx, byte
        # No carry flag for this one
        self.v[ins.x] = (self.v[ins.x] + ins.kk) & 0xFF

    def _post_8xy1_8xy2_8xy3(self):
        if self.logic_quirks:
            self.v[0xF] = 0

    def _8xy0(self, ins):  # LD Vx, Vy
        self.v[ins.x] = self.v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        self.v[ins.x] |= self.v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self, ins):  # AND Vx, Vy
        self.v[ins.x] &= self.v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.v[ins.x] ^= self.v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    # For all of the arithmetic and shift instructions below, Vf must be written AFTER Vx, as Vf may itself be Vx or Vy.
    # If Vx is Vf, the flag is what remains.

    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, ins, val):  # Post-SUB/SUBN
        self.v[ins.x] = val & 0xFF
        self.v[0xF] = int(val >= 0)  # Vf is set when NOT borrowing

    def _8xy5(self, ins):  # SUB Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.x] - self.v[ins.y])

    def _8xy6(self, ins):  # SHR Vx {, Vy}
        val = self.v[ins.x if self.shift_quirks else ins.y]
        self.v[ins.x] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.y] - self.v[ins.x])

    def _8xyE(self, ins):  # SHL Vx {, Vy}
        val = self.v[ins.x if self.shift_quirks else ins.y]
        self.v[ins.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self, ins):  # SNE Vx, Vy
        if self.v[ins.x] != self.v[ins.y]:
            self.inc_pc()

    def _Annn(self, ins):  # LD I, addr
        self.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        # With jump quirks, the first nibble of the address also names the register
        self.pc = ins.nnn + self.v[ins.x if self.jump_quirks else 0]

    def _Cxkk(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[ins.x] = randint(0, 0xFF) & ins.kk

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        rows = self.ram.read_block(self.i, ins.n) if ins.n else ()
        collided = self.framebuffer.draw_sprite(self.v[ins.x], self.v[ins.y], rows)
        self.v[0xF] = int(collided)

    def _Ex9E(self, ins):  # SKP Vx
        if self.keypad.is_key_down(self.v[ins.x] & 0xF):
            self.inc_pc()

    def _ExA1(self, ins):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[ins.x] & 0xF):
            self.inc_pc()

    def _Fx07(self, ins):  # LD Vx, DT
        self.v[ins.x] = self.timers.delay

    def _Fx0A(self, ins):  # LD Vx, K
        # Go back to this instruction and wait.  Keys already held down don't count.
        self.dec_pc()
        self.keypad.setup_keypress()
        self.await_reg = ins.x
        self.awaiting_keypress = True

    def _Fx15(self, ins):  # LD DT, Vx
        self.timers.set_delay(self.v[ins.x])

    def _Fx18(self, ins):  # LD ST, Vx
        self.timers.set_sound(self.v[ins.x])

    def _Fx1E(self, ins):  # ADD I, Vx
        val = self.i + self.v[ins.x]
        self.i = val & I_BITMASK

        # Allow for Amiga CHIP-8 emulator behaviour
        if self.index_overflow_quirks:
            self.v[0xF] = int(val > self.ram.mem_top)

    def _Fx29(self, ins):  # LD F, Vx
        self.i = FONT_LOC + FONT_GLYPH_SIZE * (self.v[ins.x] & 0xF)

    def _Fx33(self, ins):  # LD B, Vx
        val = self.v[ins.x]
        # Most-significant digit first
        self.ram.write_block(self.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _post_Fx55_Fx65(self, ins):
        if self.load_quirks:
            self.i = (self.i + ins.x + 1) & I_BITMASK

    def _Fx55(self, ins):  # LD [I], Vx
        # Ensure with +1s that the final register is copied
        self.ram.write_block(self.i, self.v[:ins.x + 1])
        self._post_Fx55_Fx65(ins)

    def _Fx65(self, ins):  # LD Vx, [I]
        self.v[:ins.x + 1] = self.ram.read_block(self.i, ins.x + 1)
        self._post_Fx55_Fx65(ins)

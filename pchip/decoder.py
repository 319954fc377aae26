#!/usr/bin/env python3

"""
Instruction Decoder

Turns a 16-bit opcode into an Instruction: an Op tag, plus every operand field
already extracted.  Decoding never touches the machine, so it can be checked
against literal opcodes on its own, and the CPU only has to look the tag up.

Each Op's value is the opcode pattern with its operand bits zeroed.  The first
nibble selects which bits identify the instruction:

    0x0          -> 0xFFFF (exact match)
    0x5/0x8/0x9  -> 0xF00F
    0xE/0xF      -> 0xF0FF
    others       -> 0xF000

Operand field names follow Cowgod's reference:
    nnn = address, kk = byte, n = nibble, x/y = register (0-15)
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import IntEnum


class CPUError(Exception):
    pass


class UnknownInstruction(CPUError):
    def __init__(self, word, address=None):
        self.word = word
        self.address = address

        if address is None:
            message = "Opcode 0x{:04x} is not a CHIP-8 instruction".format(word)
        else:
            message = "Opcode 0x{:04x} at address 0x{:03x} is not a CHIP-8 instruction".format(word, address)

        super().__init__(message)


class Op(IntEnum):
    CLS = 0x00E0
    RET = 0x00EE
    JP = 0x1000
    CALL = 0x2000
    SE_BYTE = 0x3000
    SNE_BYTE = 0x4000
    SE_REG = 0x5000
    LD_BYTE = 0x6000
    ADD_BYTE = 0x7000
    LD_REG = 0x8000
    OR = 0x8001
    AND = 0x8002
    XOR = 0x8003
    ADD_REG = 0x8004
    SUB = 0x8005
    SHR = 0x8006
    SUBN = 0x8007
    SHL = 0x800E
    SNE_REG = 0x9000
    LD_I = 0xA000
    JP_V0 = 0xB000
    RND = 0xC000
    DRW = 0xD000
    SKP = 0xE09E
    SKNP = 0xE0A1
    LD_VX_DT = 0xF007
    LD_VX_K = 0xF00A
    LD_DT_VX = 0xF015
    LD_ST_VX = 0xF018
    ADD_I_VX = 0xF01E
    LD_F_VX = 0xF029
    LD_B_VX = 0xF033
    LD_MEM_VX = 0xF055
    LD_VX_MEM = 0xF065


OPCODE_MASKS = {
    0x0: 0xFFFF,
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}
DEFAULT_MASK = 0xF000

# Values are looked up directly, rather than via Op(...) raising ValueError
OPCODES = {op.value: op for op in Op}

Instruction = namedtuple("Instruction", ["op", "word", "x", "y", "n", "kk", "nnn"])

# Disassembly templates, formatted with the Instruction's fields
MNEMONICS = {
    Op.CLS:       "CLS",
    Op.RET:       "RET",
    Op.JP:        "JP 0x{nnn:03x}",
    Op.CALL:      "CALL 0x{nnn:03x}",
    Op.SE_BYTE:   "SE V{x:01x}, 0x{kk:02x}",
    Op.SNE_BYTE:  "SNE V{x:01x}, 0x{kk:02x}",
    Op.SE_REG:    "SE V{x:01x}, V{y:01x}",
    Op.LD_BYTE:   "LD V{x:01x}, 0x{kk:02x}",
    Op.ADD_BYTE:  "ADD V{x:01x}, 0x{kk:02x}",
    Op.LD_REG:    "LD V{x:01x}, V{y:01x}",
    Op.OR:        "OR V{x:01x}, V{y:01x}",
    Op.AND:       "AND V{x:01x}, V{y:01x}",
    Op.XOR:       "XOR V{x:01x}, V{y:01x}",
    Op.ADD_REG:   "ADD V{x:01x}, V{y:01x}",
    Op.SUB:       "SUB V{x:01x}, V{y:01x}",
    Op.SHR:       "SHR V{x:01x}, V{y:01x}",
    Op.SUBN:      "SUBN V{x:01x}, V{y:01x}",
    Op.SHL:       "SHL V{x:01x}, V{y:01x}",
    Op.SNE_REG:   "SNE V{x:01x}, V{y:01x}",
    Op.LD_I:      "LD I, 0x{nnn:03x}",
    Op.JP_V0:     "JP V0, 0x{nnn:03x}",
    Op.RND:       "RND V{x:01x}, 0x{kk:02x}",
    Op.DRW:       "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
    Op.SKP:       "SKP V{x:01x}",
    Op.SKNP:      "SKNP V{x:01x}",
    Op.LD_VX_DT:  "LD V{x:01x}, DT",
    Op.LD_VX_K:   "LD V{x:01x}, K",
    Op.LD_DT_VX:  "LD DT, V{x:01x}",
    Op.LD_ST_VX:  "LD ST, V{x:01x}",
    Op.ADD_I_VX:  "ADD I, V{x:01x}",
    Op.LD_F_VX:   "LD F, V{x:01x}",
    Op.LD_B_VX:   "LD B, V{x:01x}",
    Op.LD_MEM_VX: "LD [I], V{x:01x}",
    Op.LD_VX_MEM: "LD V{x:01x}, [I]"
}


def decode(word, address=None):
    # The address is only used to report unknown opcodes
    op = OPCODES.get(word & OPCODE_MASKS.get(word >> 12, DEFAULT_MASK))

    if op is None:
        raise UnknownInstruction(word, address)

    return Instruction(
        op=op,
        word=word,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        kk=word & 0x00FF,
        nnn=word & 0x0FFF
    )


def disassemble(instruction):
    return MNEMONICS[instruction.op].format(**instruction._asdict())

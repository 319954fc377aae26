#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.decoder import (
    CPUError, UnknownInstruction, Op, OPCODE_MASKS, DEFAULT_MASK, decode, disassemble
)


class TestDecoder(unittest.TestCase):
    def test_decode_operands(self):
        ins = decode(0xD12F)
        self.assertEqual(Op.DRW, ins.op)
        self.assertEqual(0xD12F, ins.word)
        self.assertEqual(0x1, ins.x)
        self.assertEqual(0x2, ins.y)
        self.assertEqual(0xF, ins.n)
        self.assertEqual(0x2F, ins.kk)
        self.assertEqual(0x12F, ins.nnn)

    def test_decode_every_op(self):
        # Set every operand bit, and check the instruction is still recognised
        for op in Op:
            mask = OPCODE_MASKS.get(op >> 12, DEFAULT_MASK)
            word = op | (~mask & 0xFFFF)
            self.assertEqual(op, decode(word).op, "0x{:04x}".format(word))

    def test_decode_ambiguous_nibbles(self):
        for word, op in (
            (0x00E0, Op.CLS), (0x00EE, Op.RET), (0x8AB0, Op.LD_REG), (0x8AB6, Op.SHR), (0x8ABE, Op.SHL),
            (0xE59E, Op.SKP), (0xE5A1, Op.SKNP), (0xF50A, Op.LD_VX_K), (0xF555, Op.LD_MEM_VX),
            (0xF565, Op.LD_VX_MEM), (0xF529, Op.LD_F_VX), (0xF533, Op.LD_B_VX)
        ):
            self.assertEqual(op, decode(word).op)

    def test_decode_deterministic(self):
        for word in range(0x10000):
            try:
                first = decode(word)
            except UnknownInstruction:
                self.assertRaises(UnknownInstruction, decode, word)
            else:
                self.assertEqual(first, decode(word))

    def test_decode_unknown(self):
        for word in 0x0000, 0x0001, 0x0123, 0x00FF, 0x5001, 0x8008, 0x800F, 0x9001, 0xE09F, 0xE0A2, 0xF100, 0xFFFF:
            self.assertRaises(UnknownInstruction, decode, word)

    def test_decode_unknown_details(self):
        with self.assertRaises(CPUError) as ctx:
            decode(0x5AB1, 0x2F0)

        self.assertEqual(0x5AB1, ctx.exception.word)
        self.assertEqual(0x2F0, ctx.exception.address)
        self.assertIn("0x5ab1", str(ctx.exception))
        self.assertIn("0x2f0", str(ctx.exception))

    def test_disassemble(self):
        self.assertEqual("CLS", disassemble(decode(0x00E0)))
        self.assertEqual("JP 0x2a0", disassemble(decode(0x12A0)))
        self.assertEqual("ADD V3, 0x0f", disassemble(decode(0x730F)))
        self.assertEqual("DRW V1, V2, 0x5", disassemble(decode(0xD125)))
        self.assertEqual("LD [I], V3", disassemble(decode(0xF355)))
        self.assertEqual("LD Va, K", disassemble(decode(0xFA0A)))

#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pchip import create_cpu, main
from pchip.constants import FONT_LOC, PROGRAM_LOC
from pchip.ram import RomTooLarge
from plainchip import parse_args


class TestMain(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write_rom(self, data):
        filename = os.path.join(self.temp_dir.name, "test.ch8")

        with open(filename, "wb") as f:
            f.write(data)

        return filename

    def _run_main(self, filename, renderer="null"):
        args = {"filename": filename, "renderer": renderer, "debug": False, "scale": None, "clock_speed": None}

        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            return main(args)

    def test_main_missing_rom(self):
        self.assertEqual(1, self._run_main(os.path.join(self.temp_dir.name, "missing.ch8")))
        self.assertIn("Unable to start", self.stderr.getvalue())

    def test_main_rom_too_large(self):
        self.assertEqual(1, self._run_main(self._write_rom(bytes(3585))))
        self.assertIn("exceeds", self.stderr.getvalue())

    def test_main_unknown_renderer(self):
        self.assertEqual(1, self._run_main(self._write_rom(b"\x12\x00"), renderer="teletype"))

    def test_main_halts_on_unknown_instruction(self):
        self.assertEqual(1, self._run_main(self._write_rom(b"\x00\x00")))
        output = self.stderr.getvalue()
        self.assertIn("Emulation halted", output)
        self.assertIn("0x0000", output)

    def test_main_halts_on_stack_underflow(self):
        self.assertEqual(1, self._run_main(self._write_rom(b"\x00\xEE")))
        self.assertIn("Stack:", self.stderr.getvalue())

    def test_create_cpu(self):
        cpu = create_cpu(b"\x12\x34")
        self.assertEqual(0xF0, cpu.ram.read(FONT_LOC))
        self.assertEqual(0x12, cpu.ram.read(PROGRAM_LOC))
        self.assertEqual(0x34, cpu.ram.read(PROGRAM_LOC + 1))
        self.assertEqual(PROGRAM_LOC, cpu.pc)
        self.assertFalse(cpu.shift_quirks)

    def test_create_cpu_quirks(self):
        cpu = create_cpu(b"", shift_quirks=True, screen_wrap_quirks=True)
        self.assertTrue(cpu.shift_quirks)
        self.assertFalse(cpu.jump_quirks)
        self.assertTrue(cpu.framebuffer.allow_wrapping)

    def test_create_cpu_rom_too_large(self):
        self.assertRaises(RomTooLarge, create_cpu, bytes(3585))

    def test_parse_args(self):
        args = parse_args(["rom.ch8", "-c", "1000", "-r", "null", "-d"])
        self.assertEqual("rom.ch8", args.filename)
        self.assertEqual(1000, args.clock_speed)
        self.assertEqual("null", args.renderer)
        self.assertTrue(args.debug)
        self.assertIsNone(args.scale)

    def test_parse_args_defaults(self):
        args = parse_args(["rom.ch8"])
        self.assertIsNone(args.clock_speed)
        self.assertIsNone(args.renderer)
        self.assertFalse(args.debug)

    def test_parse_args_invalid(self):
        for argv in [], ["rom.ch8", "-c", "0"], ["rom.ch8", "-r", "teletype"]:
            with redirect_stderr(self.stderr), self.assertRaises(SystemExit) as ctx:
                parse_args(argv)

            self.assertEqual(2, ctx.exception.code)

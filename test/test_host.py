#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip import create_cpu
from pchip.host import Host
from pchip.inputs.i_null import Inputs
from pchip.renderers.r_null import Renderer

# 0x200: ADD V0, 1 / 0x202: JP 0x200
COUNTING_LOOP = b"\x70\x01\x12\x00"


class QuittingInputs(Inputs):
    def __init__(self, keypad, renderer, frames_before_quit):
        super().__init__(keypad, renderer)
        self.frames_before_quit = frames_before_quit

    def process_messages(self):
        if self.frames_before_quit <= 0:
            return True

        self.frames_before_quit -= 1
        return False


class TestHost(unittest.TestCase):
    def _make_host(self, clock_speed=None, rom=COUNTING_LOOP):
        self.cpu = create_cpu(rom)
        self.renderer = Renderer()
        self.inputs = Inputs(self.cpu.keypad, self.renderer)
        return Host(self.cpu, self.renderer, self.inputs, clock_speed=clock_speed)

    def test_host_default_clock_speed(self):
        host = self._make_host()
        self.assertAlmostEqual(700 / 60, host.ops_per_frame)

    def test_host_run_frame(self):
        host = self._make_host(clock_speed=120)
        self.assertFalse(host.run_frame())
        # Two instructions per frame: one ADD, one JP
        self.assertEqual(1, self.cpu.v[0x0])
        self.assertEqual(0x200, self.cpu.pc)
        self.assertEqual(1, self.renderer.frames_shown)

    def test_host_carries_fractional_ops(self):
        host = self._make_host(clock_speed=90)

        for _ in range(4):
            host.run_frame()

        # 1.5 instructions per frame, so 6 over 4 frames
        self.assertEqual(3, self.cpu.v[0x0])
        self.assertEqual(4, self.renderer.frames_shown)
        self.assertEqual(6, host.perf_counter_ops)

    def test_host_ticks_timers_once_per_frame(self):
        host = self._make_host(clock_speed=600)
        self.cpu.timers.set_delay(5)
        self.cpu.timers.set_sound(1)

        for _ in range(3):
            host.run_frame()

        self.assertEqual(2, self.cpu.timers.delay)
        self.assertEqual(0, self.cpu.timers.sound)

    def test_host_timers_tick_while_waiting_for_key(self):
        # LD V0, K
        host = self._make_host(rom=b"\xF0\x0A")
        self.cpu.timers.set_delay(3)

        for _ in range(3):
            host.run_frame()

        self.assertEqual(0, self.cpu.timers.delay)
        self.assertEqual(0x200, self.cpu.pc)

    def test_host_run_quits(self):
        self.cpu = create_cpu(COUNTING_LOOP)
        self.renderer = Renderer()
        inputs = QuittingInputs(self.cpu.keypad, self.renderer, 3)
        host = Host(self.cpu, self.renderer, inputs, clock_speed=6000)
        host.run()
        self.assertEqual(3, self.renderer.frames_shown)
        self.assertEqual(150, self.cpu.v[0x0])

    def test_host_run_frame_quit_skips_cpu(self):
        self.cpu = create_cpu(COUNTING_LOOP)
        self.renderer = Renderer()
        inputs = QuittingInputs(self.cpu.keypad, self.renderer, 0)
        host = Host(self.cpu, self.renderer, inputs)
        self.assertTrue(host.run_frame())
        self.assertEqual(0x200, self.cpu.pc)
        self.assertEqual(0, self.renderer.frames_shown)

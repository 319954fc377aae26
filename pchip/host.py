#!/usr/bin/env python3

"""
Host Frame Loop

Drives the CPU in fixed 60Hz time slices.  Each slice:
    1. Processes host input messages (which update the keypad, or ask to quit)
    2. Runs the CPU for one frame's worth of instructions
    3. Ticks the delay and sound timers once
    4. Hands a framebuffer snapshot to the renderer

Clock speeds rarely divide evenly by 60, so the fractional instruction left
over after each frame is carried into the next.  Over a second, the CPU runs
the requested number of instructions.

The CPU and its timers only move on when this loop tells them to, so if the
host lags, the emulated machine slows down rather than skipping ahead.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, TIMER_FREQ

FRAME_INTERVAL = 1.0 / TIMER_FREQ


class Host:
    def __init__(self, cpu, renderer, inputs, clock_speed=None):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.ops_per_frame = (DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed) / TIMER_FREQ
        self.ops_carry = 0.0

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run_frame(self):
        # Returns True if the host has asked to quit
        if self.inputs.process_messages():
            return True

        ops_due = self.ops_per_frame + self.ops_carry
        num_ops = int(ops_due)
        self.ops_carry = ops_due - num_ops
        cpu = self.cpu

        for _ in range(num_ops):
            cpu.step()

        cpu.tick_timers()
        self.renderer.refresh_display(cpu.framebuffer.snapshot())
        self.perf_counter_ops += num_ops
        self.perf_counter_fps += 1

        return False

    def run(self):
        next_frame_time = perf_counter()

        while True:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if self.run_frame():
                return

            # Wait for the next frame.  If we've fallen behind, carry on from now rather than trying to catch up.
            next_frame_time = max(next_frame_time + FRAME_INTERVAL, this_time)
            delay = next_frame_time - perf_counter()

            if delay > 0:
                sleep(delay)

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))

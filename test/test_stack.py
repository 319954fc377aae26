#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.stack import Stack, StackError, StackOverflow, StackUnderflow


class TestStack(unittest.TestCase):
    def setUp(self):
        self.stack = Stack(3)

    def _populate_stack(self):
        self.stack.push(0x0)
        self.stack.push(0x1)
        self.stack.push(0xFFF)

    def test_stack_push_pop(self):
        self._populate_stack()
        self.assertEqual(3, self.stack.get_depth())
        self.assertEqual(0xFFF, self.stack.pop())
        self.assertEqual(0x1, self.stack.pop())
        self.assertEqual(0x0, self.stack.pop())
        self.assertEqual(0, self.stack.get_depth())

    def test_stack_overflow(self):
        self._populate_stack()
        self.assertRaises(StackOverflow, self.stack.push, 0x1)
        self.assertEqual(3, self.stack.get_depth())

    def test_stack_underflow(self):
        self.assertRaises(StackUnderflow, self.stack.pop)

    def test_stack_error_address(self):
        err = StackOverflow(0x2A4)
        self.assertIsInstance(err, StackError)
        self.assertEqual(0x2A4, err.address)
        self.assertIn("0x2a4", str(err))
        self.assertIsNone(StackUnderflow().address)

    def test_stack_clear(self):
        self._populate_stack()
        self.stack.clear()
        self.assertEqual([], self.stack.get_items())

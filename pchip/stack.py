#!/usr/bin/env python3

"""
Stack Emulator

It is unnecessary to include the CPU call stack as part of system RAM, because
there is no specified location for it.  There is also no stack pointer (SP)
register exposed to the running program: the number of items held is the stack
pointer, so we can simply wrap a list to fully (and quickly) emulate it.

Exceeding the depth, or returning with nothing on the stack, is fatal.  The CPU
re-raises these with the address of the offending instruction.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    def __init__(self, message, address=None):
        self.address = address

        if address is not None:
            message = "{} at address 0x{:03x}".format(message, address)

        super().__init__(message)


class StackOverflow(StackError):
    def __init__(self, address=None):
        super().__init__("Stack overflow", address)


class StackUnderflow(StackError):
    def __init__(self, address=None):
        super().__init__("Stack underflow", address)


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackOverflow()

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflow() from None

    def get_depth(self):
        return len(self.items)

    def get_items(self):
        # For debugging
        return self.items

    def clear(self):
        self.items.clear()

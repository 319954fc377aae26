#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins own the keymap, translating host keys into the 16 CHIP-8 keys,
and are the only thing that writes to the keypad.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import DEFAULT_KEYMAP


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keypad, renderer, keymap=None):
        self.keypad = keypad
        self.renderer = renderer
        self.keymap_dict = dict(DEFAULT_KEYMAP if keymap is None else keymap)

        if sorted(self.keymap_dict.values()) != list(range(0x10)):
            raise InputsError("The keymap must map exactly one host key to each of the 16 keys")

    def host_key_down(self, host_key):
        hex_key = self.keymap_dict.get(host_key)

        if hex_key is not None:
            self.keypad.press(hex_key)

    def host_key_up(self, host_key):
        hex_key = self.keymap_dict.get(host_key)

        if hex_key is not None:
            self.keypad.release(hex_key)

    def process_messages(self):
        return False  # Don't exit the program

    def shutdown(self):
        pass

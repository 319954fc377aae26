#!/usr/bin/env python3

"""
Keypad State

Holds the up/down status of the 16 hexadecimal keys.  Input plugins translate
host key events into 'press' and 'release' calls; the CPU only ever reads from
here.

The key wait instruction needs to see a key go down after it started waiting,
so a held key doesn't immediately satisfy it.  'setup_keypress' clears the
latch, and 'get_keypress' reports the first key pressed since then.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

NUM_KEYS = 0x10


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

    def _check_key(self, key):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} is not on the keypad".format(key))

    def press(self, key):
        self._check_key(key)

        # Only a transition from up to down counts as a keypress
        if not self.key_down[key]:
            self.key_down[key] = True

            if self.last_keypress is None:
                self.last_keypress = key

    def release(self, key):
        self._check_key(key)
        self.key_down[key] = False

    def is_key_down(self, key):
        self._check_key(key)
        return self.key_down[key]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def reset(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

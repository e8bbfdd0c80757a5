#!/usr/bin/env python3

"""
Keypad Latch

Holds the state of the 16-key hexadecimal keypad.  Input plugins write to
this between ticks only, and the CPU only ever reads from it.

As well as which keys are held, the most recent key press is latched.  The
wait-for-key instruction resets the latch when it starts waiting, so a key
that was already held beforehand will not satisfy it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

    def set_key(self, key, pressed):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} is not on the keypad".format(key))

        pressed = bool(pressed)

        if pressed and not self.key_down[key]:
            self.last_keypress = key

        self.key_down[key] = pressed

    def is_key_down(self, key):
        # Registers can hold any byte, but only the low nibble selects a key
        return self.key_down[key & 0xF]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def release_all(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

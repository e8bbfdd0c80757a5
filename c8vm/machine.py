#!/usr/bin/env python3

"""
Machine State

Everything the interpreter owns lives here: memory, the call stack, the
framebuffer, the keypad latch, the V registers, the index register, the
program counter, both timers and the run state.

There is only one kind of machine, so this is a plain aggregate.  The CPU,
Loader and TickDriver mutate it, and host plugins only read from it (apart
from the keypad, which input plugins write between ticks).
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import ROM_LOC, STATE_PAUSED
from .framebuffer import Framebuffer
from .keypad import Keypad
from .ram import RAM
from .stack import Stack


class Machine:
    def __init__(self, ram=None, stack=None, framebuffer=None, keypad=None):
        self.ram = RAM() if ram is None else ram
        self.stack = Stack() if stack is None else stack
        self.framebuffer = Framebuffer() if framebuffer is None else framebuffer
        self.keypad = Keypad() if keypad is None else keypad

        # Bytearrays are mutable, so this should be fast when a register is updated
        self.v = memoryview(bytearray(16))
        self.i = 0
        self.pc = ROM_LOC
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer

        # Register waiting for a keypress (LD Vx, K), or None if not waiting
        self.waiting_register = None

        # Nothing runs until a ROM has been loaded
        self.state = STATE_PAUSED

    def reset(self):
        # Everything except memory contents and run state
        self.v[:] = bytes(16)
        self.i = 0
        self.pc = ROM_LOC
        self.dt = 0
        self.st = 0
        self.waiting_register = None
        self.stack.clear()
        self.framebuffer.clear()
        self.keypad.release_all()

    def set_key(self, key, pressed):
        self.keypad.set_key(key, pressed)

    @property
    def wants_beep(self):
        return self.st > 0

    @property
    def is_waiting_for_key(self):
        return self.waiting_register is not None

#!/usr/bin/env python3

"""
Host I/O Functionality

Handles reading ROM binaries from the host, and loading them (along with the
built-in system font) into a machine.  A ROM which cannot be read, or which
will not fit between 0x200 and the end of RAM, stops the machine from being
started at all.  Nothing is written into memory until the ROM has been checked.

This could be used to handle snapshots (save states), if and when implemented.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import FAULT_LOAD, FONT_LOC, MAX_ROM_SIZE, ROM_LOC, STATE_RUNNING, SYSTEM_FONT

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    pass


class Loader:
    def __init__(self, debugger=None):
        self.debugger = debugger

    def _fail(self, message):
        if self.debugger is not None:
            self.debugger.report(FAULT_LOAD, message)

        raise LoaderError(message)

    def load_binary(self, filename):
        try:
            with open(filename, "rb") as f:
                return f.read()
        except OSError as err:
            self._fail("ROM file '{}' could not be read: {}".format(filename, err.strerror or err))

    def load_rom(self, machine, rom):
        rom_size = len(rom)

        if rom_size > MAX_ROM_SIZE:
            self._fail("ROM is too large ({} bytes, the maximum is {})".format(rom_size, MAX_ROM_SIZE))

        ram = machine.ram
        ram.clear()
        ram.write_block(FONT_LOC, SYSTEM_FONT)
        ram.write_block(ROM_LOC, rom)
        machine.reset()
        machine.pc = ROM_LOC
        machine.state = STATE_RUNNING
        logger.info("Loaded %d byte ROM at 0x%03x", rom_size, ROM_LOC)

    def load_file(self, machine, filename):
        self.load_rom(machine, self.load_binary(filename))
